#!filepath: model_stages/__init__.py

from .utils.logger import Logging, logs, init_logging
from .utils.errors import (
    ConfigError,
    DataError,
    StageError,
    UnknownAdapterError,
    WriteError,
)
from .config import LogConfig, StageSettings, get_settings, set_settings
from .pipeline import ModelingContext, NamedAction, PipelineStep, StagePipeline
from .adapters import (
    AdapterRegistry,
    BaseAdapter,
    default_adapter,
    register_adapter,
    resolve_adapter,
)
from .stages import evaluation_stage, export_stage

__all__ = [
    "logs", "Logging", "init_logging",
    "StageError", "UnknownAdapterError", "WriteError", "ConfigError", "DataError",
    "LogConfig", "StageSettings", "get_settings", "set_settings",
    "ModelingContext", "NamedAction", "PipelineStep", "StagePipeline",
    "AdapterRegistry", "BaseAdapter", "default_adapter",
    "register_adapter", "resolve_adapter",
    "export_stage", "evaluation_stage",
]
