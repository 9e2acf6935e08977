#!filepath: model_stages/pipeline/step.py
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable

from model_stages.pipeline.context import ModelingContext


class PipelineStep(ABC):
    """
    Pipeline Step base class

    Responsibility:
      - one unit of stage work, run against the shared ModelingContext
      - mutate only its own stage sub-record, or perform a side effect

    Steps are callable so the runner can treat them like any other action.
    """

    stage: str = ""  # e.g. "export_stage"

    # --------------------------------------------------
    # Step identity
    # --------------------------------------------------
    @property
    def step_name(self) -> str:
        """Class name unless a subclass says otherwise."""
        return self.__class__.__name__

    # --------------------------------------------------
    # Contract
    # --------------------------------------------------
    @abstractmethod
    def run(self, ctx: ModelingContext) -> ModelingContext:
        ...

    def __call__(self, ctx: ModelingContext) -> ModelingContext:
        return self.run(ctx)


@dataclass(frozen=True)
class NamedAction:
    """
    (display_name, action) pair handed to the pipeline runner.

    The name is used for progress reporting only; uniqueness within a
    stage is the caller's responsibility.
    """

    name: str
    action: Callable[[ModelingContext], Any]

    def __call__(self, ctx: ModelingContext) -> Any:
        return self.action(ctx)

    def __iter__(self):
        # unpacks as (name, action)
        return iter((self.name, self.action))
