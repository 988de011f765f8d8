"""Configuration loading from environment variables."""

from __future__ import annotations

import os

from kubeunmount.models.config import LogConfig, UnmountConfig

_ENV_PREFIX = "KUBECTL_UNMOUNT_"


def _env(key: str, default: str = "") -> str:
    return os.environ.get(f"{_ENV_PREFIX}{key}", default)


def _env_bool(key: str, default: bool = False) -> bool:
    val = _env(key, str(default).lower())
    return val.lower() in ("true", "1", "yes")


def _env_int(key: str, default: int, min_val: int | None = None, max_val: int | None = None) -> int:
    val = int(_env(key, str(default)))
    if min_val is not None:
        val = max(val, min_val)
    if max_val is not None:
        val = min(val, max_val)
    return val


def _env_float(key: str, default: float) -> float:
    return float(_env(key, str(default)))


def validate_log_level(value: str) -> str:
    valid = {"debug", "info", "warning", "error"}
    if value.lower() not in valid:
        raise ValueError(f"Invalid log level: {value}. Must be one of {valid}")
    return value.lower()


def validate_log_format(value: str) -> str:
    valid = {"console", "json"}
    if value.lower() not in valid:
        raise ValueError(f"Invalid log format: {value}. Must be one of {valid}")
    return value.lower()


def load_config() -> UnmountConfig:
    """Load configuration from KUBECTL_UNMOUNT_* environment variables."""
    return UnmountConfig(
        namespace=_env("NAMESPACE", ""),
        all_namespaces=_env_bool("ALL_NAMESPACES", False),
        pvc_name=_env("PVC_NAME", ""),
        storage_class=_env("STORAGE_CLASS", ""),
        dry_run=_env_bool("DRY_RUN", True),
        confirmed=_env_bool("CONFIRMED", False),
        wait=_env_bool("WAIT", True),
        wait_timeout_seconds=_env_int("WAIT_TIMEOUT", 300, min_val=0, max_val=3600),
        poll_interval_seconds=_env_float("POLL_INTERVAL", 2.0),
        max_owner_depth=_env_int("MAX_OWNER_DEPTH", 10, min_val=1, max_val=50),
        kubeconfig=_env("KUBECONFIG", ""),
        context=_env("CONTEXT", ""),
        log=LogConfig(
            level=validate_log_level(_env("LOG_LEVEL", "info")),
            format=validate_log_format(_env("LOG_FORMAT", "console")),
        ),
    )
