from __future__ import annotations

import httpx

from hiddenai.base.timeouts import NetworkConfig, get_network_config


def test_default_profile_values():
    cfg = get_network_config()
    assert cfg == NetworkConfig()  # nosec B101
    assert cfg.request_timeout_seconds == 60.0  # nosec B101
    assert cfg.resource_timeout_seconds == 120.0  # nosec B101
    assert cfg.max_retries == 3  # nosec B101
    assert cfg.base_retry_delay_seconds == 0.5  # nosec B101


def test_whisper_profile_backs_off_slower():
    assert get_network_config("whisper").base_retry_delay_seconds == 1.0  # nosec B101
    assert get_network_config("WHISPER").base_retry_delay_seconds == 1.0  # nosec B101


def test_unknown_profile_uses_default():
    assert get_network_config("vision") == get_network_config("default")  # nosec B101


def test_env_overrides_and_invalid_values(monkeypatch):
    monkeypatch.setenv("HIDDENAI_REQUEST_TIMEOUT_SECONDS", "15")
    monkeypatch.setenv("HIDDENAI_MAX_RETRIES", "0")
    monkeypatch.setenv("HIDDENAI_RETRY_BASE_DELAY", "not-a-number")
    monkeypatch.setenv("HIDDENAI_RESOURCE_TIMEOUT_SECONDS", "-5")
    cfg = get_network_config()
    assert cfg.request_timeout_seconds == 15.0  # nosec B101
    assert cfg.max_retries == 0  # nosec B101
    assert cfg.base_retry_delay_seconds == 0.5  # nosec B101
    assert cfg.resource_timeout_seconds == 120.0  # nosec B101


def test_httpx_timeout_mapping():
    timeout = NetworkConfig(request_timeout_seconds=10, resource_timeout_seconds=30).httpx_timeout()
    assert isinstance(timeout, httpx.Timeout)  # nosec B101
    assert timeout.connect == 10  # nosec B101
    assert timeout.read == 10  # nosec B101
    assert timeout.write == 30  # nosec B101
