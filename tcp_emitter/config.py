from __future__ import annotations

import logging
import os
from typing import Any, Dict

from dotenv import load_dotenv

from tcp_emitter.protocol.constants import DEFAULT_DELIMITER, MAX_BUFFER_SIZE, READ_CHUNK_SIZE

DEFAULT_CONFIG: Dict[str, Any] = {
    "server_host": "127.0.0.1",
    "server_port": 8080,
    "delimiter": DEFAULT_DELIMITER,
    "max_buffer_size": MAX_BUFFER_SIZE,
    "read_chunk_size": READ_CHUNK_SIZE,
    "connect_timeout": 10,
    "reconnect_backoff": 1,
    "max_reconnect_backoff": 30,
    "max_reconnect_retries": 0,
    "log_level": "INFO",
}

CLIENT_CONFIG: Dict[str, Any] = DEFAULT_CONFIG.copy()

ENV_PREFIX = "EMITTER_"


class ConfigError(Exception):
    """Raised when configuration values are invalid."""

    pass


def load_config(env_path: str = ".env") -> Dict[str, Any]:
    """Load client configuration from env file/environment variables."""
    if os.path.exists(env_path):
        load_dotenv(env_path)

    for key, default_value in DEFAULT_CONFIG.items():
        env_key = f"{ENV_PREFIX}{key.upper()}"
        value = os.getenv(env_key, default_value)
        CLIENT_CONFIG[key] = _coerce_type(value, type(default_value))

    _validate_config()
    logging.getLogger().setLevel(CLIENT_CONFIG["log_level"])
    return CLIENT_CONFIG


def _coerce_type(value: Any, target_type: type) -> Any:
    if isinstance(value, target_type):
        return value
    try:
        if target_type is bool:
            return str(value).lower() in ("1", "true", "yes", "on")
        return target_type(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Cannot convert {value} to {target_type}") from exc


def _validate_config() -> None:
    if not (1 <= int(CLIENT_CONFIG["server_port"]) <= 65535):
        raise ConfigError("server_port must be between 1 and 65535")
    if not CLIENT_CONFIG["delimiter"]:
        raise ConfigError("delimiter must not be empty")
    for key in ("max_buffer_size", "read_chunk_size", "connect_timeout"):
        if CLIENT_CONFIG[key] <= 0:
            raise ConfigError(f"{key} must be positive")
    if CLIENT_CONFIG["max_reconnect_retries"] < 0:
        raise ConfigError("max_reconnect_retries must not be negative")


__all__ = ["CLIENT_CONFIG", "DEFAULT_CONFIG", "ConfigError", "load_config"]
