from __future__ import annotations

import os

_DEFAULT_REGISTRY_URL = "https://kul-setu-backend.onrender.com"
_DEFAULT_REGISTRY_TIMEOUT = 30.0


def get_registry_url() -> str:
    """Base URL of the person registry (no trailing slash)."""
    url = (os.environ.get("KINTREE_REGISTRY_URL") or "").strip()
    if not url:
        url = _DEFAULT_REGISTRY_URL
    return url.rstrip("/")


def get_registry_timeout() -> float:
    raw = (os.environ.get("KINTREE_REGISTRY_TIMEOUT") or "").strip()
    if not raw:
        return _DEFAULT_REGISTRY_TIMEOUT
    try:
        timeout = float(raw)
    except ValueError:
        raise RuntimeError(f"KINTREE_REGISTRY_TIMEOUT is not a number: {raw!r}") from None
    if timeout <= 0:
        raise RuntimeError("KINTREE_REGISTRY_TIMEOUT must be positive")
    return timeout


def get_log_level() -> str:
    return (os.environ.get("KINTREE_LOG_LEVEL") or "INFO").strip().upper()
