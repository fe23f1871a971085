"""hiddenai command line (package entrypoint).

Wires argument parsing to the handlers in ``cli_actions``; performs no request
logic itself.
"""

from __future__ import annotations

import sys
from typing import Optional

from ..base.logging import configure_logger
from ..openai import OpenAIService
from .cli_actions import ServiceFactory, handle_ask, handle_explain, handle_image, handle_transcribe
from .cli_parser import build_parser


def main(argv: Optional[list[str]] = None, service_factory: Optional[ServiceFactory] = None) -> int:
    """CLI entrypoint.

    Parameters
    ----------
    argv: Optional[list[str]]
        Argument vector; when ``None`` uses ``sys.argv[1:]``.
    service_factory: Optional[ServiceFactory]
        Builds the ``OpenAIService``; defaults to one configured from the
        environment. Tests inject a service backed by a fake SDK client.

    Returns
    -------
    int
        0 on success, 1 when the request failed, 2 on usage errors.
    """
    args = build_parser().parse_args(list(sys.argv[1:] if argv is None else argv))
    if args.log_level:
        configure_logger(level=args.log_level)
    if args.cmd == "explain":
        return handle_explain(args)

    if service_factory is None:
        service_factory = OpenAIService

    handlers = {"ask": handle_ask, "image": handle_image, "transcribe": handle_transcribe}
    return handlers[args.cmd](args, service_factory)


__all__ = ["main"]
