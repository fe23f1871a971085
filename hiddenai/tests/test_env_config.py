from __future__ import annotations

import json

import pytest

from hiddenai.config import ConfigFileError, get_context, get_service_config, load_config_file
from hiddenai.config.defaults import CHAT_DEFAULT_MODEL, CONTEXT_MAX_CHARS, GENERAL_DEFAULT_CONTEXT
from hiddenai.config.env import is_placeholder


def test_defaults_without_environment():
    cfg = get_service_config()
    assert cfg["api_key"] is None  # nosec B101
    assert cfg["chat_model"] == CHAT_DEFAULT_MODEL  # nosec B101
    assert cfg["whisper_model"] == "whisper-1"  # nosec B101
    assert cfg["temperature"] == 0.7  # nosec B101
    assert cfg["vision_max_tokens"] == 1000  # nosec B101


def test_env_overrides_models_and_key(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-real")
    monkeypatch.setenv("HIDDENAI_CHAT_MODEL", "gpt-4o-mini")
    cfg = get_service_config()
    assert cfg["api_key"] == "sk-real"  # nosec B101
    assert cfg["chat_model"] == "gpt-4o-mini"  # nosec B101


def test_placeholder_key_is_treated_as_missing(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "changeme")
    assert get_service_config()["api_key"] is None  # nosec B101
    assert is_placeholder("  PLACEHOLDER-key ")  # nosec B101
    assert not is_placeholder("sk-abc")  # nosec B101


def test_overrides_win_over_env(monkeypatch):
    monkeypatch.setenv("HIDDENAI_CHAT_MODEL", "from-env")
    cfg = get_service_config({"chat_model": "from-code", "temperature": "0.2"})
    assert cfg["chat_model"] == "from-code"  # nosec B101
    assert cfg["temperature"] == 0.2  # nosec B101


def test_yaml_config_file(tmp_path, monkeypatch):
    path = tmp_path / "hiddenai.yaml"
    path.write_text("vision_model: gpt-4o-mini\ncontexts:\n  screenshot: Describe the screen.\n", encoding="utf-8")
    monkeypatch.setenv("HIDDENAI_CONFIG_FILE", str(path))
    cfg = get_service_config()
    assert cfg["vision_model"] == "gpt-4o-mini"  # nosec B101
    assert get_context(cfg, "screenshot") == "Describe the screen."  # nosec B101
    assert get_context(cfg, "general") == GENERAL_DEFAULT_CONTEXT  # nosec B101


def test_json_config_file_and_env_precedence(tmp_path, monkeypatch):
    path = tmp_path / "hiddenai.json"
    path.write_text(json.dumps({"chat_model": "file-model", "whisper_model": "file-whisper"}), encoding="utf-8")
    monkeypatch.setenv("HIDDENAI_CONFIG_FILE", str(path))
    monkeypatch.setenv("HIDDENAI_CHAT_MODEL", "env-model")
    cfg = get_service_config()
    assert cfg["chat_model"] == "env-model"  # nosec B101
    assert cfg["whisper_model"] == "file-whisper"  # nosec B101


def test_missing_config_file_is_ignored(tmp_path):
    assert load_config_file(str(tmp_path / "absent.yaml")) == {}  # nosec B101


def test_non_mapping_config_file_raises(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ConfigFileError):
        load_config_file(str(path))


def test_context_falls_back_to_general(monkeypatch):
    monkeypatch.setenv("HIDDENAI_GENERAL_CONTEXT", "Answer like a tutor.")
    cfg = get_service_config()
    assert get_context(cfg, "text") == "Answer like a tutor."  # nosec B101
    assert get_context(cfg, "whisper") == "Answer like a tutor."  # nosec B101
    assert get_context(cfg, "something-else") == "Answer like a tutor."  # nosec B101


def test_voice_context_env_maps_to_whisper(monkeypatch):
    monkeypatch.setenv("HIDDENAI_VOICE_CONTEXT", "Spoken question.")
    cfg = get_service_config()
    assert get_context(cfg, "whisper") == "Spoken question."  # nosec B101
    assert get_context(cfg, "text") == GENERAL_DEFAULT_CONTEXT  # nosec B101


def test_contexts_are_truncated():
    cfg = get_service_config({"contexts": {"text": "x" * (CONTEXT_MAX_CHARS + 50)}})
    assert len(get_context(cfg, "text")) == CONTEXT_MAX_CHARS  # nosec B101
