"""CLI parser construction for the hiddenai command.

Wires subparsers only; handlers live in ``cli_actions``. No I/O here.
"""

from __future__ import annotations

import argparse

from ..base.errors import FailureReason
from ..config import QUESTION_TYPES


def _add_output_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--json", action="store_true", help="Print machine-readable JSON")


def build_parser() -> argparse.ArgumentParser:
    """Construct the top-level parser with ``ask``, ``image``, ``transcribe`` and ``explain``."""
    p = argparse.ArgumentParser(prog="hiddenai", description="Send text, screenshots or audio to OpenAI")
    p.add_argument("--log-level", default=None, help="Override HIDDENAI_LOG_LEVEL")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_ask = sub.add_parser("ask", help="Send a text prompt")
    p_ask.add_argument("prompt")
    p_ask.add_argument("--type", dest="question_type", default="text", choices=QUESTION_TYPES)
    _add_output_flags(p_ask)

    p_image = sub.add_parser("image", help="Ask a question about a screenshot")
    p_image.add_argument("path")
    p_image.add_argument("--prompt", default="What is shown in this screenshot?")
    _add_output_flags(p_image)

    p_tr = sub.add_parser("transcribe", help="Transcribe an audio recording")
    p_tr.add_argument("path")
    p_tr.add_argument("--ask", action="store_true", help="Send the transcript as a voice question")
    _add_output_flags(p_tr)

    p_ex = sub.add_parser("explain", help="Classify a failure offline and show what the user would see")
    p_ex.add_argument("--status", type=int, default=None)
    p_ex.add_argument("--reason", choices=[r.value for r in FailureReason], default=None)
    p_ex.add_argument("--message", default=None)
    p_ex.add_argument("--retry-after", type=float, default=None)
    _add_output_flags(p_ex)

    return p


__all__ = ["build_parser"]
