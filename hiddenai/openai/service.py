"""OpenAI service: chat, screenshot (vision) and transcription requests.

``OpenAIService`` is the single entry point the presentation layer talks to.
It owns the running conversation, builds validated payloads, and sends them
through the ``openai`` SDK with the SDK's own retries disabled so the shared
retry policy (``hiddenai.base.resilience``) decides what gets re-issued.

Failure contract
----------------
Every public request method either returns the reply text or raises
``ServiceError``. Before raising, the error is logged (``request.error``) and
posted on the notification center's ``error`` topic. Successful replies are
posted on the ``response`` topic.

No request leaves the process without an API key: ``API_KEY_MISSING`` is
raised before any validation or I/O.
"""

from __future__ import annotations

import logging
import uuid
from pathlib import Path
from typing import Any, Callable, Dict, List, NoReturn, Optional, Sequence, TypeVar, Union

from openai import OpenAI
from pydantic import ValidationError

from ..base.cancellation import CancellationToken
from ..base.dto import ChatCompletionRequestDTO
from ..base.errors import ServiceError, classify
from ..base.http import get_httpx_client
from ..base.logging import LogContext, get_logger, log_event
from ..base.models import Conversation, Message
from ..base.notifications import ERROR_TOPIC, RESPONSE_TOPIC, NotificationCenter
from ..base.resilience import RetryConfig, run_with_retry
from ..base.timeouts import NetworkConfig, get_network_config
from ..config import get_context, get_service_config
from ..config.defaults import AUDIO_FORMATS, AUDIO_MIN_BYTES, IMAGE_FORMATS
from .helpers import check_upload, extract_chat_text, extract_transcript, image_data_url

T = TypeVar("T")
PathLike = Union[str, Path]

_logger = get_logger("hiddenai.openai")


class OpenAIService:
    """Conversation-aware OpenAI client.

    Parameters:
        api_key: Explicit key; otherwise resolved through ``get_service_config``.
        config: Pre-merged configuration (skips config resolution).
        client: SDK-compatible client to use instead of building ``openai.OpenAI``
            (exposes ``chat.completions.create`` and
            ``audio.transcriptions.create``).
        notifications: Notification center to publish replies and errors on.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        config: Optional[Dict[str, Any]] = None,
        client: Any = None,
        notifications: Optional[NotificationCenter] = None,
    ) -> None:
        self._config = dict(config) if config is not None else get_service_config()
        if api_key:
            self._config["api_key"] = api_key
        self._api_key: Optional[str] = self._config.get("api_key") or None
        self._injected_client = client
        self._clients: Dict[str, Any] = {}
        self.notifications = notifications or NotificationCenter()
        self._conversation = Conversation(get_context(self._config, "general"))

    # -------------------- Configuration --------------------

    @property
    def has_api_key(self) -> bool:
        return bool(self._api_key)

    def is_configured(self) -> bool:
        return self.has_api_key

    def set_api_key(self, key: Optional[str]) -> None:
        """Replace the API key; SDK clients are rebuilt on next use."""
        self._api_key = (key or "").strip() or None
        self._clients.clear()

    @property
    def conversation(self) -> Conversation:
        return self._conversation

    def clear_conversation(self) -> None:
        """Forget every turn, keeping the system prompt."""
        self._conversation.clear()

    # -------------------- Requests --------------------

    def send_request(
        self,
        prompt: str,
        question_type: str = "text",
        *,
        token: Optional[CancellationToken] = None,
    ) -> str:
        """Send ``prompt`` with the running conversation as context.

        The system prompt is switched to the one for ``question_type``. The
        user turn is recorded once the payload validates, before the request
        goes out; a rejected prompt leaves the history untouched.
        """
        model = self._config["chat_model"]
        ctx = self._context("chat", model)
        self._require_key(ctx)
        self._conversation.set_system(get_context(self._config, question_type))
        request = self._build_request(
            ctx,
            model=model,
            messages=[*self._conversation.as_payload(), {"role": "user", "content": prompt}],
            temperature=self._config["temperature"],
        )
        self._conversation.add_user(prompt)
        reply = self._chat_completion(ctx, request, token)
        self._conversation.add_assistant(reply)
        return self._deliver(ctx, reply)

    def send_request_with_context(
        self,
        prompt: str,
        context_messages: Sequence[Message],
        *,
        token: Optional[CancellationToken] = None,
    ) -> str:
        """Send ``prompt`` with explicitly chosen earlier messages as context.

        Only the system prompt is taken from the running conversation; both
        turns are appended to it once the reply arrives.
        """
        model = self._config["chat_model"]
        ctx = self._context("chat_with_context", model, context_messages=len(context_messages))
        self._require_key(ctx)
        messages: List[Dict[str, Any]] = [{"role": "system", "content": self._conversation.system_prompt}]
        messages.extend(m.to_payload() for m in context_messages)
        messages.append({"role": "user", "content": prompt})
        request = self._build_request(
            ctx,
            model=model,
            messages=messages,
            temperature=self._config["temperature"],
        )
        reply = self._chat_completion(ctx, request, token)
        self._conversation.add_user(prompt)
        self._conversation.add_assistant(reply)
        return self._deliver(ctx, reply)

    def send_image_request(
        self,
        image_path: PathLike,
        prompt: str,
        context_messages: Optional[Sequence[Message]] = None,
        *,
        token: Optional[CancellationToken] = None,
    ) -> str:
        """Ask about a screenshot; the image is sent inline as a data URL."""
        path = Path(image_path)
        model = self._config["vision_model"]
        ctx = self._context("vision", model, file=path.name)
        self._require_key(ctx)
        try:
            check_upload(path, IMAGE_FORMATS)
            data_url = image_data_url(path)
        except ServiceError as err:
            self._fail(ctx, err)
        except OSError as exc:
            self._fail(ctx, classify(exc), exc)

        messages: List[Dict[str, Any]] = [
            {"role": "system", "content": get_context(self._config, "screenshot")}
        ]
        messages.extend(m.to_payload() for m in context_messages or ())
        messages.append(
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": prompt},
                    {"type": "image_url", "image_url": {"url": data_url}},
                ],
            }
        )
        request = self._build_request(
            ctx,
            model=model,
            messages=messages,
            max_tokens=self._config["vision_max_tokens"],
        )
        reply = self._chat_completion(ctx, request, token)
        self._conversation.add_user(f"Screenshot analysis request: {prompt}")
        self._conversation.add_assistant(reply)
        return self._deliver(ctx, reply)

    def transcribe_audio(
        self,
        audio_path: PathLike,
        *,
        token: Optional[CancellationToken] = None,
    ) -> str:
        """Transcribe a recording with Whisper and return the text.

        The transcript is not added to the conversation; callers usually feed
        it to ``send_request(..., question_type="whisper")``.
        """
        path = Path(audio_path)
        model = self._config["whisper_model"]
        ctx = self._context("transcription", model, file=path.name)
        self._require_key(ctx)
        try:
            size = check_upload(path, AUDIO_FORMATS, min_bytes=AUDIO_MIN_BYTES)
            data = path.read_bytes()
        except ServiceError as err:
            self._fail(ctx, err)
        except OSError as exc:
            self._fail(ctx, classify(exc), exc)
        ctx.extra["bytes"] = size

        def _call() -> str:
            client = self._client_for("whisper")
            resp = client.audio.transcriptions.create(model=model, file=(path.name, data))
            return extract_transcript(resp)

        text = self._execute(ctx, _call, get_network_config("whisper"), token)
        log_event(_logger, "request.success", ctx, chars=len(text))
        return text

    # -------------------- Internals --------------------

    def _context(self, operation: str, model: str, **extra: Any) -> LogContext:
        return LogContext(operation=operation, model=model, request_id=uuid.uuid4().hex[:12], extra=dict(extra))

    def _require_key(self, ctx: LogContext) -> None:
        if not self.has_api_key:
            self._fail(ctx, ServiceError.api_key_missing())

    def _build_request(self, ctx: LogContext, **fields: Any) -> ChatCompletionRequestDTO:
        try:
            return ChatCompletionRequestDTO(**fields)
        except ValidationError as exc:
            self._fail(ctx, classify(exc), exc)

    def _chat_completion(
        self,
        ctx: LogContext,
        request: ChatCompletionRequestDTO,
        token: Optional[CancellationToken],
    ) -> str:
        kwargs = request.to_sdk_kwargs()

        def _call() -> str:
            resp = self._client_for("default").chat.completions.create(**kwargs)
            return extract_chat_text(resp)

        return self._execute(ctx, _call, get_network_config("default"), token)

    def _execute(
        self,
        ctx: LogContext,
        call: Callable[[], T],
        network: NetworkConfig,
        token: Optional[CancellationToken],
    ) -> T:
        log_event(_logger, "request.start", ctx)
        try:
            return run_with_retry(call, RetryConfig.from_network(network), token)
        except ServiceError as err:
            self._fail(ctx, err, err.__cause__)

    def _client_for(self, purpose: str) -> Any:
        if self._injected_client is not None:
            return self._injected_client
        client = self._clients.get(purpose)
        if client is None:
            base_url = self._config.get("base_url")
            client = OpenAI(
                api_key=self._api_key,
                base_url=base_url,
                max_retries=0,
                timeout=get_network_config(purpose).httpx_timeout(),
                http_client=get_httpx_client(base_url, purpose),
            )
            self._clients[purpose] = client
        return client

    def _deliver(self, ctx: LogContext, reply: str) -> str:
        log_event(_logger, "request.success", ctx, chars=len(reply))
        self.notifications.post(RESPONSE_TOPIC, reply)
        return reply

    def _fail(self, ctx: LogContext, err: ServiceError, cause: Optional[BaseException] = None) -> NoReturn:
        log_event(
            _logger,
            "request.error",
            ctx,
            level=logging.ERROR,
            error_kind=err.kind.value,
            retryable=err.is_retryable,
            status_code=err.status_code,
            message=err.user_message,
        )
        self.notifications.post(ERROR_TOPIC, err)
        if cause is not None and cause is not err:
            raise err from cause
        raise err


__all__ = ["OpenAIService"]
