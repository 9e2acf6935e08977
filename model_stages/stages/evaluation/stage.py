# model_stages/stages/evaluation/stage.py
from __future__ import annotations

from typing import Any, List, Optional

from model_stages import logs
from model_stages.pipeline.context import ModelingContext
from model_stages.pipeline.step import NamedAction, PipelineStep
from model_stages.stages.evaluation.irr import IRRComparator
from model_stages.stages.evaluation.params import EvaluationParameters
from model_stages.stages.evaluation.partition import PartitionSelector
from model_stages.stages.evaluation.report import ValidationReportEngine
from model_stages.stages.evaluation.scoring import SurvivalScorer
from model_stages.utils.errors import DataError


class EvaluationOptionsStep(PipelineStep):
    """
    EvaluationOptionsStep

    Semantics:
    - store resolved params in ctx.evaluation_stage
    - pick the validation partition of ctx.data_stage.raw_data
    - score it and publish prediction_data + baseline_fcn
    """

    stage = "evaluation_stage"

    def __init__(
        self,
        params: EvaluationParameters,
        *,
        selector: Optional[PartitionSelector] = None,
        scorer: Optional[SurvivalScorer] = None,
    ):
        self.params = params
        self.selector = selector or PartitionSelector()
        self.scorer = scorer or SurvivalScorer()

    def run(self, ctx: ModelingContext) -> ModelingContext:
        ctx.evaluation_stage.params = self.params

        raw_data = ctx.data_stage.raw_data
        if raw_data is None:
            raise DataError("data_stage.raw_data", "no raw data to evaluate on")

        rows = self.selector.select(ctx, self.params, raw_data)
        self.scorer.score(ctx, self.params, raw_data, rows)
        return ctx


class ValidationPlotStep(PipelineStep):
    """
    ValidationPlotStep

    Outputs:
    - ctx.evaluation_stage.irr_comparison
    - <output>.csv
    - <output>.png
    """

    stage = "evaluation_stage"

    def __init__(
        self,
        *,
        comparator: Optional[IRRComparator] = None,
        engine: Optional[ValidationReportEngine] = None,
    ):
        self.comparator = comparator or IRRComparator()
        self.engine = engine or ValidationReportEngine()

    def run(self, ctx: ModelingContext) -> ModelingContext:
        state = ctx.evaluation_stage
        if state.prediction_data is None or state.baseline_fcn is None:
            raise DataError(
                "evaluation_stage.prediction_data",
                "evaluation options step has not run",
            )

        comparison = self.comparator.compare(state.prediction_data, state.baseline_fcn)
        state.irr_comparison = comparison

        params = state.params
        csv_path = self.engine.write_csv(
            state.prediction_data, params.output, params.id_column
        )
        logs.info(f"[ValidationPlot] saved {csv_path}")

        png_path = self.engine.plot_irr_buckets(comparison, params.output)
        logs.info(f"[ValidationPlot] saved {png_path}")

        return ctx


def evaluation_stage(evaluation_parameters: Any) -> List[NamedAction]:
    """
    Evaluation stage for a survival model.

    Compares, per benchmark bucket, the IRR implied by the model's survival
    curve with the contractual IRR on the held-out validation rows.

    Args:
        evaluation_parameters: mapping of stage options; ``output`` is
            required, see EvaluationParameters for the rest.

    Raises:
        ConfigError: options are missing or unsupported. Raised here, before
            any partition or scoring work.
    """
    params = EvaluationParameters.from_options(evaluation_parameters)

    return [
        NamedAction(
            "(Internal) Generate evaluation options", EvaluationOptionsStep(params)
        ),
        NamedAction("validation plot", ValidationPlotStep()),
    ]
