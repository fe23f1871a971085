"""Unified configuration layer for the OpenAI service.

Sources are merged in a predictable order (later wins):
    1. Built-in defaults (``hiddenai.config.defaults``)
    2. Optional JSON or YAML file pointed to by ``HIDDENAI_CONFIG_FILE``
    3. Environment variables (``OPENAI_API_KEY``, ``HIDDENAI_CHAT_MODEL``...)
    4. In-code overrides passed to ``get_service_config``

External config file example (YAML):

```
chat_model: gpt-4o
temperature: 0.5
contexts:
  text: "Answer briefly."
  screenshot: "Describe what is on screen, then answer."
```

Public API
----------
* get_service_config(overrides: dict | None = None) -> dict
* get_context(config: dict, question_type: str) -> str
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .defaults import (
    CHAT_DEFAULT_MODEL,
    CHAT_DEFAULT_TEMPERATURE,
    CONTEXT_MAX_CHARS,
    GENERAL_DEFAULT_CONTEXT,
    VISION_DEFAULT_MAX_TOKENS,
    VISION_DEFAULT_MODEL,
    WHISPER_DEFAULT_MODEL,
)
from .env import CONFIG_FILE_ENV, CONTEXT_ENV_MAP, ENV_FIELD_MAP, is_placeholder

QUESTION_TYPES = tuple(CONTEXT_ENV_MAP)


def _defaults() -> Dict[str, Any]:
    return {
        "api_key": None,
        "base_url": None,
        "chat_model": CHAT_DEFAULT_MODEL,
        "vision_model": VISION_DEFAULT_MODEL,
        "whisper_model": WHISPER_DEFAULT_MODEL,
        "temperature": CHAT_DEFAULT_TEMPERATURE,
        "vision_max_tokens": VISION_DEFAULT_MAX_TOKENS,
        # text / whisper / screenshot fall back to the general prompt when unset
        "contexts": {"general": GENERAL_DEFAULT_CONTEXT},
    }


class ConfigFileError(ValueError):
    """Raised when ``HIDDENAI_CONFIG_FILE`` exists but cannot be parsed."""


def load_config_file(path: Optional[str] = None) -> Dict[str, Any]:
    """Load the external config file (JSON first, then YAML).

    A missing path or missing file yields ``{}``; a file that parses to
    something other than a mapping, or does not parse, raises
    ``ConfigFileError``.
    """
    path = path or os.getenv(CONFIG_FILE_ENV)
    if not path:
        return {}
    p = Path(path).expanduser()
    if not p.is_file():
        return {}
    text = p.read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        try:
            data = yaml.safe_load(text) or {}
        except yaml.YAMLError as exc:
            raise ConfigFileError(f"cannot parse {p}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigFileError(f"{p} must contain a mapping at top level")
    return data


def _env_overrides() -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for key, env_name in ENV_FIELD_MAP.items():
        val = os.getenv(env_name)
        if val:
            out[key] = val
    contexts = {name: os.environ[env] for name, env in CONTEXT_ENV_MAP.items() if env in os.environ}
    if contexts:
        out["contexts"] = contexts
    return out


def _merge(cfg: Dict[str, Any], layer: Dict[str, Any]) -> None:
    for key, val in layer.items():
        if val is None:
            continue
        if key == "contexts" and isinstance(val, dict):
            cfg["contexts"] |= {str(k): str(v) for k, v in val.items()}
        else:
            cfg[key] = val


def get_service_config(overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return merged service configuration.

    Merge order (later wins): defaults -> config file -> env vars -> overrides.
    Placeholder API keys are dropped; context prompts are truncated to
    ``CONTEXT_MAX_CHARS``; numeric fields are coerced.
    """
    cfg = _defaults()
    _merge(cfg, load_config_file())
    _merge(cfg, _env_overrides())
    if overrides:
        _merge(cfg, overrides)

    if is_placeholder(cfg.get("api_key")) or not (cfg.get("api_key") or "").strip():
        cfg["api_key"] = None
    cfg["temperature"] = float(cfg["temperature"])
    cfg["vision_max_tokens"] = int(cfg["vision_max_tokens"])
    cfg["contexts"] = {k: v[:CONTEXT_MAX_CHARS] for k, v in cfg["contexts"].items()}
    return cfg


def get_context(config: Dict[str, Any], question_type: str) -> str:
    """Return the system prompt for ``question_type``.

    ``screenshot``, ``whisper`` and ``text`` have their own prompts; any other
    type uses the general prompt.
    """
    contexts = config.get("contexts") or {}
    key = question_type if question_type in ("screenshot", "whisper", "text") else "general"
    return contexts.get(key) or contexts.get("general") or GENERAL_DEFAULT_CONTEXT


__all__ = [
    "ConfigFileError",
    "QUESTION_TYPES",
    "get_context",
    "get_service_config",
    "load_config_file",
]
