#!filepath: model_stages/config/settings.py
from __future__ import annotations

import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from .log_config import LogConfig

DEFAULT_ADAPTER = "file"

_ENV_PREFIX = "MODEL_STAGES_"


class StageSettings(BaseModel):
    """
    Process-level settings shared by every stage.

    Only ambient knobs live here (default adapter keyword, logging);
    stage parameters come from the model definition.
    """

    default_adapter: str = DEFAULT_ADAPTER
    log: LogConfig = Field(default_factory=LogConfig)

    @classmethod
    def load(cls, env_file: Optional[str] = None) -> "StageSettings":
        """
        Build settings from the environment.

        - .env is loaded first (existing variables win)
        - MODEL_STAGES_DEFAULT_ADAPTER / _LOG_DIR / _LOG_LEVEL override defaults
        """
        load_dotenv(env_file)

        raw: dict = {}
        log: dict = {}

        adapter = os.getenv(f"{_ENV_PREFIX}DEFAULT_ADAPTER")
        if adapter:
            raw["default_adapter"] = adapter

        log_dir = os.getenv(f"{_ENV_PREFIX}LOG_DIR")
        if log_dir:
            log["dir"] = log_dir

        level = os.getenv(f"{_ENV_PREFIX}LOG_LEVEL")
        if level:
            log["level"] = level.upper()

        raw["log"] = log
        return cls(**raw)


_settings: Optional[StageSettings] = None


def get_settings() -> StageSettings:
    """Lazily loaded process-wide settings."""
    global _settings
    if _settings is None:
        _settings = StageSettings.load()
    return _settings


def set_settings(settings: Optional[StageSettings]) -> None:
    """Override (or reset with None) the process-wide settings."""
    global _settings
    _settings = settings
