from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List, Optional

DEFAULT_MAX_BODY_BYTES = 200_000


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    Env vars:
    - HOST: interface uvicorn binds to. Default '127.0.0.1'
    - PORT: listening port. Default 3000
    - TODO_MAX_BODY_BYTES: body size limit for POST/PATCH /todos. Default 200000
    - LOG_LEVEL: root log level name. Default 'INFO'
    - LOG_FILE: optional path of a log file in addition to stderr
    - CORS_ALLOW_ORIGINS: comma-separated list of allowed origins; '*' by default
    """

    host: str = "127.0.0.1"
    port: int = 3000
    max_body_bytes: int = DEFAULT_MAX_BODY_BYTES
    log_level: str = "INFO"
    log_file: Optional[str] = None
    cors_allow_origins: List[str] = field(default_factory=lambda: ["*"])


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name, default)
    if value is None or value == "":
        return default
    return value


def _parse_int(value: str, default: int) -> int:
    """Parse a positive integer, falling back to default on garbage or values < 1."""
    try:
        parsed = int(value.strip())
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _parse_origins(origins_value: str) -> List[str]:
    """
    Parse CORS origins from env. Supports:
    - '*' to allow all origins
    - Comma-separated list of origins
    """
    value = origins_value.strip()
    if value == "*":
        # Star will be handled in main via allow_origins=["*"]
        return ["*"]
    return [o.strip() for o in value.split(",") if o.strip()]


# PUBLIC_INTERFACE
def get_settings() -> Settings:
    """Return application settings loaded from environment variables."""
    log_file = _get_env("LOG_FILE", "").strip() or None

    return Settings(
        host=_get_env("HOST", "127.0.0.1").strip(),
        port=_parse_int(_get_env("PORT", "3000"), 3000),
        max_body_bytes=_parse_int(_get_env("TODO_MAX_BODY_BYTES", str(DEFAULT_MAX_BODY_BYTES)), DEFAULT_MAX_BODY_BYTES),
        log_level=_get_env("LOG_LEVEL", "INFO").strip().upper(),
        log_file=log_file,
        cors_allow_origins=_parse_origins(_get_env("CORS_ALLOW_ORIGINS", "*")),
    )
