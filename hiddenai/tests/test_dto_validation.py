from __future__ import annotations

import pytest
from pydantic import ValidationError

from hiddenai.base.dto import ChatCompletionRequestDTO, ContentPartDTO, MessageDTO


def test_chat_request_valid_minimal():
    dto = ChatCompletionRequestDTO(model="gpt-4o", messages=[{"role": "user", "content": "hi"}])
    assert dto.to_sdk_kwargs() == {"model": "gpt-4o", "messages": [{"role": "user", "content": "hi"}]}  # nosec B101


def test_chat_request_requires_messages():
    with pytest.raises(ValidationError):
        ChatCompletionRequestDTO(model="gpt-4o", messages=[])


def test_chat_request_rejects_blank_model():
    with pytest.raises(ValidationError):
        ChatCompletionRequestDTO(model="", messages=[{"role": "user", "content": "hi"}])


def test_first_message_must_be_system_or_user():
    with pytest.raises(ValidationError):
        ChatCompletionRequestDTO(model="m", messages=[{"role": "assistant", "content": "hello"}])


@pytest.mark.parametrize("temperature", [-0.1, 2.5])
def test_temperature_bounds(temperature):
    with pytest.raises(ValidationError):
        ChatCompletionRequestDTO(model="m", messages=[{"role": "user", "content": "x"}], temperature=temperature)


def test_max_tokens_must_be_positive():
    with pytest.raises(ValidationError):
        ChatCompletionRequestDTO(model="m", messages=[{"role": "user", "content": "x"}], max_tokens=0)


def test_user_content_must_not_be_blank_but_system_may_be():
    with pytest.raises(ValidationError):
        MessageDTO(role="user", content="   ")
    assert MessageDTO(role="system", content="").content == ""  # nosec B101


def test_content_parts_validation():
    with pytest.raises(ValidationError):
        ContentPartDTO(type="text")
    with pytest.raises(ValidationError):
        ContentPartDTO(type="image_url")
    with pytest.raises(ValidationError):
        MessageDTO(role="user", content=[])


def test_image_request_dumps_without_none_fields():
    dto = ChatCompletionRequestDTO(
        model="gpt-4o",
        max_tokens=1000,
        messages=[
            {"role": "system", "content": "describe"},
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": "what is this?"},
                    {"type": "image_url", "image_url": {"url": "data:image/png;base64,AAAA"}},
                ],
            },
        ],
    )
    kwargs = dto.to_sdk_kwargs()
    assert "temperature" not in kwargs  # nosec B101
    assert kwargs["max_tokens"] == 1000  # nosec B101
    assert kwargs["messages"][1]["content"] == [  # nosec B101
        {"type": "text", "text": "what is this?"},
        {"type": "image_url", "image_url": {"url": "data:image/png;base64,AAAA"}},
    ]
