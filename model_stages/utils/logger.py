#!filepath: model_stages/utils/logger.py
from __future__ import annotations

import os
import sys
from functools import wraps
from time import perf_counter
from typing import Callable, Optional

from loguru import logger

_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level} | {message}"


class Logging:
    """
    Process-wide logging facade over loguru.
    ---------------------------------------
    - stderr sink by default
    - optional daily-rotated file sink with retention
    ---------------------------------------
    """

    def __init__(
        self,
        log_dir: Optional[str] = None,
        rotation: str = "1 day",
        retention: str = "30 days",
        log_level: str = "INFO",
    ):
        self.log_dir = log_dir
        self.rotation = rotation
        self.retention = retention
        self.level = log_level

        self._configure()

    def _configure(self) -> None:
        """
        Replace every loguru sink with the ones described by this instance.
        """
        logger.remove()

        logger.add(sys.stderr, level=self.level, format=_FORMAT)

        if self.log_dir:
            os.makedirs(self.log_dir, exist_ok=True)
            logger.add(
                sink=f"{self.log_dir}/{{time:YYYY-MM-DD}}.log",
                rotation=self.rotation,
                retention=self.retention,
                level=self.level,
                format=_FORMAT,
                enqueue=True,
                backtrace=True,
                diagnose=True,
            )

    # ---------- logging methods ----------
    def debug(self, msg: str, *args, **kwargs):
        logger.debug(msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs):
        logger.info(msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs):
        logger.warning(msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs):
        logger.error(msg, *args, **kwargs)

    def exception(self, msg: str, *args, **kwargs):
        logger.exception(msg, *args, **kwargs)

    # ---------- decorators ----------
    def catch(
        self,
        msg: str = "Exception occurred",
        log_inputs: bool = False,
        log_time: bool = True,
    ) -> Callable:
        """
        Log any exception raised by the wrapped callable, then re-raise it.
        """

        def decorator(func: Callable):
            @wraps(func)
            def wrapper(*args, **kwargs):
                if log_inputs:
                    logger.debug(f"[CALL] {func.__qualname__} args={args}, kwargs={kwargs}")

                start = perf_counter()
                try:
                    result = func(*args, **kwargs)
                except Exception:
                    logger.exception(f"[ERROR] {func.__qualname__}: {msg}")
                    raise

                if log_time:
                    logger.debug(
                        f"[TIME] {func.__qualname__} took {perf_counter() - start:.4f}s"
                    )
                return result

            return wrapper

        return decorator


# Default global logs (reconfigured in place by init_logging)
logs = Logging()


def init_logging(cfg) -> Logging:
    """
    Reconfigure the global logger from a LogConfig.

    The existing instance is mutated so modules that already imported
    ``logs`` pick up the new sinks.
    """
    logs.log_dir = cfg.dir
    logs.rotation = cfg.rotation
    logs.retention = cfg.retention
    logs.level = cfg.level
    logs._configure()
    return logs
