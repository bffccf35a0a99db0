"""Hardcoded default configuration values."""

from __future__ import annotations

from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {
    "app_name": "embedarr",
    "environment": "dev",
    "http": {
        "timeout_seconds": 10.0,
        "user_agent": "Embedarr/0.1.0",
    },
    "logging": {
        "level": "INFO",
        "format": None,  # Derived from environment in schema.py
    },
    "store": {
        "backend": "diskcache",
        "dir": "./data/embedarr",
        "redis_url": "redis://localhost:6379/0",
        "max_concurrent": 10,
    },
    "admin": {
        "emails": [],
        "identity_header": "X-Forwarded-Email",
    },
    "tmdb": {
        "api_key": None,
        "language": "en-US",
    },
}
