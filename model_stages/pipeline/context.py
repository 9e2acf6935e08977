#!filepath: model_stages/pipeline/context.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional, Set

import numpy as np
import pandas as pd


@dataclass
class ModelStageState:
    model: Any = None


@dataclass
class DataStageState:
    # dataset as it looked before data preparation
    raw_data: Optional[pd.DataFrame] = None
    validation_primary_key: Optional[Set[Any]] = None


@dataclass
class EvaluationStageState:
    params: Any = None
    prediction_data: Optional[pd.DataFrame] = None
    baseline_fcn: Optional[np.ndarray] = None
    irr_comparison: Optional[pd.DataFrame] = None


@dataclass
class ExportStageState:
    errors: List[Exception] = field(default_factory=list)


@dataclass
class ModelingContext:
    """
    ModelingContext = the one shared state of a pipeline run

    Semantics:
    - One context == one pipeline run (created at start, dropped at end)
    - Each stage writes only its own sub-record
    - Cross-stage reads (e.g. model_stage.model) are read-only
    """

    model_stage: ModelStageState = field(default_factory=ModelStageState)
    data_stage: DataStageState = field(default_factory=DataStageState)
    evaluation_stage: EvaluationStageState = field(
        default_factory=EvaluationStageState
    )
    export_stage: ExportStageState = field(default_factory=ExportStageState)

    @classmethod
    def start(
        cls,
        *,
        model: Any = None,
        raw_data: Optional[pd.DataFrame] = None,
        validation_primary_key: Optional[Set[Any]] = None,
    ) -> "ModelingContext":
        return cls(
            model_stage=ModelStageState(model=model),
            data_stage=DataStageState(
                raw_data=raw_data,
                validation_primary_key=(
                    set(validation_primary_key)
                    if validation_primary_key is not None
                    else None
                ),
            ),
        )
