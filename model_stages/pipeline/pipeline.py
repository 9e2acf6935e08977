#!filepath: model_stages/pipeline/pipeline.py
from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from model_stages import logs
from model_stages.pipeline.context import ModelingContext
from model_stages.pipeline.step import NamedAction
from model_stages.utils.errors import WriteError


class StagePipeline:
    """
    StagePipeline = scheduler for stage actions

    Rules:
    - stages run in insertion order, actions in list order, synchronously
    - a WriteError is isolated to its action: logged, collected into
      ctx.export_stage.errors, and the next action runs
    - every other exception aborts the run
    """

    def __init__(
        self,
        stages: Dict[str, Sequence[NamedAction]],
        *,
        halt_on_write_error: bool = False,
    ):
        self.stages = stages
        self.halt_on_write_error = halt_on_write_error

    def run(self, ctx: Optional[ModelingContext] = None) -> ModelingContext:
        ctx = ctx if ctx is not None else ModelingContext()
        logs.info("[StagePipeline] ====== START ======")

        for stage_name, actions in self.stages.items():
            logs.info(f"[StagePipeline] stage {stage_name} ({len(actions)} actions)")
            for action in actions:
                self._run_action(stage_name, action, ctx)

        self._report(ctx.export_stage.errors)
        logs.info("[StagePipeline] ====== DONE ======")
        return ctx

    # --------------------------------------------------
    def _run_action(self, stage_name: str, action: NamedAction, ctx: ModelingContext) -> None:
        logs.info(f"[StagePipeline] {stage_name} / {action.name}")
        try:
            action(ctx)
        except WriteError as e:
            if self.halt_on_write_error:
                raise
            logs.warning(f"[StagePipeline] {action.name} failed: {e}")
            ctx.export_stage.errors.append(e)

    @staticmethod
    def _report(errors: List[Exception]) -> None:
        if not errors:
            return
        keywords = [getattr(e, "keyword", "?") for e in errors]
        logs.warning(
            f"[StagePipeline] {len(errors)} export write(s) failed: {keywords}"
        )
