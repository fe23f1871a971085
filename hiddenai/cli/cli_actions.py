"""CLI action handlers.

Each handler receives parsed arguments and a service factory, writes the
result to stdout and returns the process exit code. A ``ServiceError`` is
rendered as the user message plus recovery hint on stderr (or as JSON with
``--json``) and yields exit code 1. A configuration that cannot be loaded
is reported the same way before any request is made. No top-level side
effects.
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Callable, Dict, Optional

from ..base.errors import Failure, FailureReason, ServiceError, classify, describe
from ..openai import OpenAIService

ServiceFactory = Callable[[], OpenAIService]


def error_payload(err: ServiceError) -> Dict[str, Any]:
    """Return the JSON shape used for failures."""
    d = describe(err)
    return {
        "ok": False,
        "kind": err.kind.value,
        "message": d.user_message,
        "recovery": d.recovery_suggestion,
        "retryable": d.is_retryable,
    }


def _emit_text(args: argparse.Namespace, text: str) -> int:
    if args.json:
        print(json.dumps({"ok": True, "text": text}, ensure_ascii=False))
    else:
        print(text)
    return 0


def _emit_error(args: argparse.Namespace, err: ServiceError) -> int:
    if args.json:
        print(json.dumps(error_payload(err), ensure_ascii=False))
    else:
        print(err.user_message, file=sys.stderr)
        print(err.recovery_suggestion, file=sys.stderr)
    return 1


def _build_service(args: argparse.Namespace, factory: ServiceFactory) -> Optional[OpenAIService]:
    """Return the service, or ``None`` after reporting a broken configuration."""
    try:
        return factory()
    except (ValueError, OSError) as exc:  # ConfigFileError, bad numeric fields, unreadable file
        if args.json:
            print(json.dumps({"ok": False, "kind": "config_error", "message": str(exc)}, ensure_ascii=False))
        else:
            print(f"Configuration error: {exc}", file=sys.stderr)
            print("Fix HIDDENAI_CONFIG_FILE or the HIDDENAI_* environment overrides.", file=sys.stderr)
        return None


def handle_ask(args: argparse.Namespace, factory: ServiceFactory) -> int:
    service = _build_service(args, factory)
    if service is None:
        return 1
    try:
        reply = service.send_request(args.prompt, question_type=args.question_type)
    except ServiceError as err:
        return _emit_error(args, err)
    return _emit_text(args, reply)


def handle_image(args: argparse.Namespace, factory: ServiceFactory) -> int:
    service = _build_service(args, factory)
    if service is None:
        return 1
    try:
        reply = service.send_image_request(args.path, args.prompt)
    except ServiceError as err:
        return _emit_error(args, err)
    return _emit_text(args, reply)


def handle_transcribe(args: argparse.Namespace, factory: ServiceFactory) -> int:
    """Transcribe, optionally forwarding the transcript as a voice question."""
    service = _build_service(args, factory)
    if service is None:
        return 1
    try:
        text = service.transcribe_audio(args.path)
        if args.ask:
            text = service.send_request(text, question_type="whisper")
    except ServiceError as err:
        return _emit_error(args, err)
    return _emit_text(args, text)


def handle_explain(args: argparse.Namespace) -> int:
    """Classify a synthetic failure and print its description (no network)."""
    failure = Failure(
        status_code=args.status,
        reason=FailureReason(args.reason) if args.reason else None,
        message=args.message,
        retry_after=args.retry_after,
    )
    err = classify(failure)
    d = describe(err)
    if args.json:
        payload = error_payload(err)
        del payload["ok"]
        print(json.dumps(payload, ensure_ascii=False))
        return 0
    print(f"kind:       {err.kind.value}")
    print(f"message:    {d.user_message}")
    print(f"recovery:   {d.recovery_suggestion}")
    print(f"retryable:  {'yes' if d.is_retryable else 'no'}")
    return 0


__all__ = [
    "ServiceFactory",
    "error_payload",
    "handle_ask",
    "handle_explain",
    "handle_image",
    "handle_transcribe",
]
