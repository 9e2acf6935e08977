from .log_config import LogConfig
from .settings import DEFAULT_ADAPTER, StageSettings, get_settings, set_settings

__all__ = [
    "LogConfig",
    "StageSettings",
    "DEFAULT_ADAPTER",
    "get_settings",
    "set_settings",
]
