# app/settings.py
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# backend/app/.env, real environment wins
load_dotenv(Path(__file__).with_name(".env"), override=False)


def _bool_env(name: str, default: bool) -> bool:
    v = os.getenv(name)
    if v is None:
        return default
    return v.strip().lower() in {"1", "true", "yes", "y", "on"}


def _int_env(name: str, default: int) -> int:
    v = os.getenv(name)
    if not v:
        return default
    try:
        return int(v.strip())
    except ValueError:
        return default


def _str_env(*names: str, default: str = "") -> str:
    for name in names:
        v = (os.getenv(name) or "").strip()
        if v:
            return v
    return default


@dataclass
class Settings:
    APP_NAME: str = "Catalog API"
    API_PREFIX: str = field(default_factory=lambda: _str_env("API_PREFIX", default="/api"))
    DEBUG: bool = field(default_factory=lambda: _bool_env("DEBUG", False))

    HOST: str = field(default_factory=lambda: _str_env("HOST", default="0.0.0.0"))
    PORT: int = field(default_factory=lambda: _int_env("PORT", 3001))

    # older frontends shipped the URI as VITE_MONGO_URI
    MONGO_URI: str = field(default_factory=lambda: _str_env("MONGO_URI", "VITE_MONGO_URI"))
    MONGO_DB: str = field(default_factory=lambda: _str_env("MONGO_DB", default="KarshanGhela"))

    MONGO_SERVER_SELECTION_TIMEOUT_MS: int = field(default_factory=lambda: _int_env("MONGO_SERVER_SELECTION_TIMEOUT_MS", 5000))
    MONGO_CONNECT_TIMEOUT_MS: int = field(default_factory=lambda: _int_env("MONGO_CONNECT_TIMEOUT_MS", 10000))
    MONGO_SOCKET_TIMEOUT_MS: int = field(default_factory=lambda: _int_env("MONGO_SOCKET_TIMEOUT_MS", 20000))

    ENSURE_INDEXES: bool = field(default_factory=lambda: _bool_env("ENSURE_INDEXES", False))

    # Contact form email (optional)
    SMTP_HOST: str = field(default_factory=lambda: _str_env("SMTP_HOST"))
    SMTP_PORT: int = field(default_factory=lambda: _int_env("SMTP_PORT", 587))
    SMTP_USER: str = field(default_factory=lambda: _str_env("SMTP_USER"))
    SMTP_PASS: str = field(default_factory=lambda: _str_env("SMTP_PASS"))
    SMTP_STARTTLS: bool = field(default_factory=lambda: _bool_env("SMTP_STARTTLS", True))
    SMTP_TIMEOUT_SECONDS: int = field(default_factory=lambda: _int_env("SMTP_TIMEOUT_SECONDS", 10))
    CONTACT_TO_EMAIL: str = field(default_factory=lambda: _str_env("CONTACT_TO_EMAIL", "SMTP_USER"))
    CONTACT_FROM_EMAIL: str = field(default_factory=lambda: _str_env("CONTACT_FROM_EMAIL", "SMTP_USER"))


settings = Settings()
