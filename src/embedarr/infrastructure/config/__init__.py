from __future__ import annotations

from .load import load_config
from .schema import AdminConfig, AppConfig, EnvOverrides, StoreConfig, TmdbConfig

__all__ = [
    "AdminConfig",
    "AppConfig",
    "EnvOverrides",
    "StoreConfig",
    "TmdbConfig",
    "load_config",
]
