"""Network timeout and retry settings.

Centralizes the numbers every outbound request uses so no call site carries
its own literals.

NetworkConfig
    Frozen settings bundle: per-request timeout, whole-resource timeout,
    retry count and base backoff delay.

get_network_config(profile)
    Returns the settings for a named profile (``default`` or ``whisper``),
    applying environment overrides:
        HIDDENAI_REQUEST_TIMEOUT_SECONDS
        HIDDENAI_RESOURCE_TIMEOUT_SECONDS
        HIDDENAI_MAX_RETRIES
        HIDDENAI_RETRY_BASE_DELAY
    Invalid or non-positive values fall back to the profile default.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Dict, Optional

import httpx


@dataclass(frozen=True)
class NetworkConfig:
    """Timeout and retry values (seconds) for one class of request.

    Attributes:
        request_timeout_seconds: Idle timeout for connect/read/write.
        resource_timeout_seconds: Cap on the whole request including upload.
        max_retries: Extra attempts after the first one.
        base_retry_delay_seconds: Backoff base; attempt ``n`` waits
            ``base * 2 ** n``.
    """

    request_timeout_seconds: float = 60.0
    resource_timeout_seconds: float = 120.0
    max_retries: int = 3
    base_retry_delay_seconds: float = 0.5

    def httpx_timeout(self) -> httpx.Timeout:
        return httpx.Timeout(self.resource_timeout_seconds, connect=self.request_timeout_seconds, read=self.request_timeout_seconds)


PROFILES: Dict[str, NetworkConfig] = {
    "default": NetworkConfig(),
    "whisper": NetworkConfig(base_retry_delay_seconds=1.0),
}


def _parse_env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def _parse_env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = int(raw)
    except ValueError:
        return default
    return val if val >= 0 else default


def get_network_config(profile: Optional[str] = None) -> NetworkConfig:
    """Return the `NetworkConfig` for ``profile`` with environment overrides.

    Unknown profiles resolve to ``default``. The environment is read on every
    call.
    """
    base = PROFILES.get((profile or "default").lower(), PROFILES["default"])
    return replace(
        base,
        request_timeout_seconds=_parse_env_float("HIDDENAI_REQUEST_TIMEOUT_SECONDS", base.request_timeout_seconds),
        resource_timeout_seconds=_parse_env_float("HIDDENAI_RESOURCE_TIMEOUT_SECONDS", base.resource_timeout_seconds),
        max_retries=_parse_env_int("HIDDENAI_MAX_RETRIES", base.max_retries),
        base_retry_delay_seconds=_parse_env_float("HIDDENAI_RETRY_BASE_DELAY", base.base_retry_delay_seconds),
    )


__all__ = ["NetworkConfig", "PROFILES", "get_network_config"]
