# model_stages/utils/errors.py
from __future__ import annotations

from typing import Iterable, Optional


class StageError(RuntimeError):
    """
    Root of every error raised by model stages.
    """


class UnknownAdapterError(StageError):
    """
    Raised at build time when an export keyword has no registered adapter.
    """

    def __init__(self, keyword: str, available: Iterable[str] = ()):
        self.keyword = keyword
        self.available = sorted(available)
        super().__init__(
            f"[AdapterRegistry] unknown adapter keyword: {keyword!r} "
            f"(available: {', '.join(self.available) or 'none'})"
        )


class WriteError(StageError):
    """
    One adapter failed to write the model artifact.

    Carries the adapter keyword and the underlying cause so the caller
    can decide to warn, collect or halt.
    """

    def __init__(self, keyword: str, cause: BaseException):
        self.keyword = keyword
        self.cause = cause
        super().__init__(
            f"[Export] write via {keyword!r} failed: "
            f"{type(cause).__name__}: {cause}"
        )


class ConfigError(StageError):
    """
    Missing or unsupported stage configuration.
    Raised when the stage is built, before any work starts.
    """

    def __init__(self, field: Optional[str], message: str):
        self.field = field
        prefix = f"[{field}] " if field else ""
        super().__init__(f"{prefix}{message}")


class DataError(StageError):
    """
    Problem with the data a stage operates on (missing column, empty
    validation set, term longer than the survival curve ...).
    """

    def __init__(self, field: Optional[str], message: str):
        self.field = field
        prefix = f"[{field}] " if field else ""
        super().__init__(f"{prefix}{message}")
