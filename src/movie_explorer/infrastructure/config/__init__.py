from __future__ import annotations

from .load import config_warnings, load_config
from .schema import AppConfig, EnvOverrides

__all__ = ["AppConfig", "EnvOverrides", "config_warnings", "load_config"]
