"""Pytest configuration for the hiddenai test suite.

Every test runs with the hiddenai environment variables cleared so a
developer's shell (or a real ``OPENAI_API_KEY``) never leaks into results.
The fake SDK client below mirrors the two ``openai.OpenAI`` call paths the
service uses and records every call it receives.
"""

from __future__ import annotations

import time
from types import SimpleNamespace
from typing import Any, Callable, Iterator, List, Optional

import pytest

from hiddenai.base.http import close_all_clients
from hiddenai.config import get_service_config
from hiddenai.config.env import CONFIG_FILE_ENV, CONTEXT_ENV_MAP, ENV_FIELD_MAP

_NETWORK_ENV = (
    "HIDDENAI_REQUEST_TIMEOUT_SECONDS",
    "HIDDENAI_RESOURCE_TIMEOUT_SECONDS",
    "HIDDENAI_MAX_RETRIES",
    "HIDDENAI_RETRY_BASE_DELAY",
    "HIDDENAI_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Clear every variable the config and network layers read."""
    for name in (*ENV_FIELD_MAP.values(), *CONTEXT_ENV_MAP.values(), CONFIG_FILE_ENV, *_NETWORK_ENV):
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture(scope="session", autouse=True)
def close_http_clients_after_session() -> Iterator[None]:
    yield
    close_all_clients()


@pytest.fixture()
def no_sleep(monkeypatch: pytest.MonkeyPatch) -> List[float]:
    """Replace ``time.sleep`` and return the list of requested delays."""
    slept: List[float] = []
    monkeypatch.setattr(time, "sleep", lambda seconds: slept.append(seconds))
    return slept


def chat_response(text: Optional[str]) -> SimpleNamespace:
    """Build an object shaped like an SDK ``ChatCompletion``."""
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=text))])


class FakeOpenAI:
    """Stand-in for ``openai.OpenAI`` exposing the chat and transcription paths.

    ``chat_replies`` / ``transcripts`` are consumed in order; an entry that is
    an exception instance is raised instead of returned.
    """

    def __init__(self, chat_replies: Any = (), transcripts: Any = ()) -> None:
        self.chat_replies = list(chat_replies)
        self.transcripts = list(transcripts)
        self.chat_calls: List[dict] = []
        self.transcription_calls: List[dict] = []
        self.chat = SimpleNamespace(completions=SimpleNamespace(create=self._create_chat))
        self.audio = SimpleNamespace(transcriptions=SimpleNamespace(create=self._create_transcription))

    @staticmethod
    def _next(queue: List[Any]) -> Any:
        item = queue.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item

    def _create_chat(self, **kwargs: Any) -> Any:
        self.chat_calls.append(kwargs)
        item = self._next(self.chat_replies)
        return chat_response(item) if isinstance(item, str) else item

    def _create_transcription(self, **kwargs: Any) -> Any:
        self.transcription_calls.append(kwargs)
        item = self._next(self.transcripts)
        return SimpleNamespace(text=item) if isinstance(item, str) else item


@pytest.fixture()
def service_factory() -> Callable[..., Any]:
    """Return a builder for ``OpenAIService`` wired to a ``FakeOpenAI``."""
    from hiddenai.openai import OpenAIService

    def _build(client: Optional[FakeOpenAI] = None, api_key: Optional[str] = "sk-live-123", **overrides: Any):
        config = get_service_config(overrides or None)
        config["api_key"] = api_key
        return OpenAIService(config=config, client=client or FakeOpenAI())

    return _build


@pytest.fixture()
def fake_openai() -> type[FakeOpenAI]:
    """Expose the fake client class so tests can script replies."""
    return FakeOpenAI
