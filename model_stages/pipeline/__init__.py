from .context import (
    DataStageState,
    EvaluationStageState,
    ExportStageState,
    ModelingContext,
    ModelStageState,
)
from .step import NamedAction, PipelineStep
from .pipeline import StagePipeline
