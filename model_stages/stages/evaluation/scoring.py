# model_stages/stages/evaluation/scoring.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence

import numpy as np
import pandas as pd

from model_stages import logs
from model_stages.pipeline.context import ModelingContext
from model_stages.stages.evaluation.params import EvaluationParameters
from model_stages.utils.errors import DataError

PREDICTION_COLUMNS = (
    "dep_var",
    "dep_val",
    "benchmark",
    "installment",
    "funded_amnt",
    "term",
    "score",
)


@dataclass(frozen=True)
class PredictionRecord:
    """One scored validation row."""

    dep_var: Any
    dep_val: Any
    benchmark: Any
    installment: float
    funded_amnt: float
    term: Any
    score: float
    id_value: Any = None

    @classmethod
    def from_row(cls, row: pd.Series, id_column: Optional[str] = None) -> "PredictionRecord":
        return cls(
            dep_var=row["dep_var"],
            dep_val=row["dep_val"],
            benchmark=row["benchmark"],
            installment=row["installment"],
            funded_amnt=row["funded_amnt"],
            term=row["term"],
            score=row["score"],
            id_value=row[id_column] if id_column and id_column in row.index else None,
        )


def _source_columns(params: EvaluationParameters) -> Dict[str, str]:
    """prediction column -> raw data column"""
    return {
        "dep_var": params.dep_var,
        "dep_val": params.dep_val,
        "benchmark": params.id_benchmark,
        "installment": params.id_installment,
        "funded_amnt": params.id_funded_amnt,
        "term": params.id_term,
    }


def baseline_curve(model: Any) -> np.ndarray:
    output = getattr(model, "output", None)
    curve = getattr(output, "baseline_fcn", None)
    if curve is None:
        raise DataError("baseline_fcn", "model exposes no output.baseline_fcn survival curve")
    return np.asarray(curve, dtype=float)


class SurvivalScorer:
    """
    SurvivalScorer

    Scores the validation rows with the trained model and assembles the
    prediction frame (one PredictionRecord per row).

    Writes:
      ctx.evaluation_stage.prediction_data
      ctx.evaluation_stage.baseline_fcn
    """

    def score(
        self,
        ctx: ModelingContext,
        params: EvaluationParameters,
        raw_data: pd.DataFrame,
        validation_rows: Sequence[int],
    ) -> pd.DataFrame:
        model = ctx.model_stage.model
        if model is None:
            raise DataError("model_stage.model", "no trained model to evaluate")

        if len(validation_rows) == 0:
            raise DataError("validation_rows", "validation set is empty")

        columns = _source_columns(params)
        required = list(columns.values())
        if params.id_column is not None:
            required.append(params.id_column)

        for col in required:
            if col not in raw_data.columns:
                raise DataError(col, "column missing from raw data")

        validation = raw_data.iloc[list(validation_rows)]

        scores = np.asarray(model.predict(validation), dtype=float).ravel()
        if len(scores) != len(validation):
            raise DataError(
                "score",
                f"model returned {len(scores)} scores for {len(validation)} rows",
            )

        prediction = pd.DataFrame(
            {name: validation[col].to_numpy() for name, col in columns.items()}
        )
        prediction["score"] = scores

        if params.id_column is not None:
            prediction[params.id_column] = validation[params.id_column].to_numpy()

        ctx.evaluation_stage.prediction_data = prediction
        ctx.evaluation_stage.baseline_fcn = baseline_curve(model)

        logs.info(f"[SurvivalScorer] scored {len(prediction)} validation rows")
        return prediction

    @staticmethod
    def records(
        prediction_data: pd.DataFrame, id_column: Optional[str] = None
    ) -> list[PredictionRecord]:
        return [
            PredictionRecord.from_row(row, id_column)
            for _, row in prediction_data.iterrows()
        ]
