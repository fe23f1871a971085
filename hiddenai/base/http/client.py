"""Shared HTTP client pool.

``OpenAIService`` hands these clients to the ``openai`` SDK so every service
instance talking to the same endpoint reuses one connection pool. Clients are
keyed by ``(base_url, purpose)``; the purpose doubles as the network profile
name, so whisper uploads get the whisper timeouts.

Everything left open is closed at interpreter exit. Tests call
:func:`close_all_clients` directly.
"""

from __future__ import annotations

import atexit
import threading
from typing import Any, Dict, Optional, Tuple

import httpx

from ..logging import get_logger
from ..timeouts import get_network_config

PoolKey = Tuple[Optional[str], str]

_pool: Dict[PoolKey, httpx.Client] = {}
_pool_lock = threading.Lock()
_logger = get_logger("hiddenai.http")


def _build_client(base_url: Optional[str], purpose: str) -> httpx.Client:
    options: Dict[str, Any] = {"timeout": get_network_config(purpose).httpx_timeout()}
    if base_url:
        options["base_url"] = base_url
    return httpx.Client(**options)


def get_httpx_client(base_url: Optional[str], purpose: str = "default") -> httpx.Client:
    """Return the pooled client for ``(base_url, purpose)``, creating it on first use.

    A client that was closed behind the pool's back is replaced.
    """
    key = (base_url, purpose)
    with _pool_lock:
        client = _pool.get(key)
        if client is None or client.is_closed:
            client = _pool[key] = _build_client(base_url, purpose)
        return client


def close_all_clients() -> None:
    """Close every pooled client and empty the pool."""
    with _pool_lock:
        clients = list(_pool.values())
        _pool.clear()
    for client in clients:
        try:
            client.close()
        except Exception as exc:  # noqa: BLE001 - shutdown continues for remaining clients
            _logger.debug("http client close failed: %s", exc)


atexit.register(close_all_clients)

__all__ = ["get_httpx_client", "close_all_clients"]
