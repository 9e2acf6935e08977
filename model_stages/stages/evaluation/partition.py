# model_stages/stages/evaluation/partition.py
from __future__ import annotations

import math
from numbers import Real
from typing import List

import numpy as np
import pandas as pd

from model_stages import logs
from model_stages.pipeline.context import ModelingContext
from model_stages.stages.evaluation.params import EvaluationParameters
from model_stages.utils.errors import ConfigError, DataError

EXTERNAL_KEY = "external_key"
EXPLICIT_ROWS = "explicit_rows"
RANDOM = "random"
SEQUENTIAL = "sequential"


class PartitionSelector:
    """
    PartitionSelector

    Decides which rows of the raw dataset are held out for validation.
    Returns 0-based row positions: 1-indexed row k is position k - 1.

    Strategy precedence (first match wins):
      1. external key   ctx.data_stage.validation_primary_key
      2. explicit rows  params.validation_rows, verbatim
      3. random         stratified by dep_var, seeded
      4. sequential     last (1 - train_percent) of the rows
    """

    def strategy_for(
        self, ctx: ModelingContext, params: EvaluationParameters
    ) -> str:
        if ctx.data_stage.validation_primary_key is not None:
            return EXTERNAL_KEY
        if params.validation_rows is not None:
            return EXPLICIT_ROWS
        if params.random_sample:
            return RANDOM
        return SEQUENTIAL

    def select(
        self,
        ctx: ModelingContext,
        params: EvaluationParameters,
        raw_data: pd.DataFrame,
    ) -> List[int]:
        strategy = self.strategy_for(ctx, params)

        if strategy == EXTERNAL_KEY:
            rows = self._by_external_key(
                ctx.data_stage.validation_primary_key, params, raw_data
            )
        elif strategy == EXPLICIT_ROWS:
            rows = self._explicit(params, raw_data)
        elif strategy == RANDOM:
            rows = self._random(params, raw_data)
        else:
            rows = self._sequential(params, raw_data)

        logs.info(
            f"[PartitionSelector] strategy={strategy} "
            f"validation_rows={len(rows)}/{len(raw_data)}"
        )
        return rows

    # --------------------------------------------------
    # strategies
    # --------------------------------------------------
    @staticmethod
    def _by_external_key(key, params: EvaluationParameters, raw_data: pd.DataFrame) -> List[int]:
        if params.id_column is None:
            raise ConfigError(
                "id_column", "needed to match data_stage.validation_primary_key"
            )
        if params.id_column not in raw_data.columns:
            raise DataError(params.id_column, "id column missing from raw data")

        mask = raw_data[params.id_column].isin(key).to_numpy()
        return np.flatnonzero(mask).tolist()

    @staticmethod
    def _explicit(params: EvaluationParameters, raw_data: pd.DataFrame) -> List[int]:
        rows = list(params.validation_rows)
        n = len(raw_data)
        bad = [r for r in rows if not 0 <= r < n]
        if bad:
            raise DataError(
                "validation_rows", f"row positions out of range [0, {n}): {bad[:5]}"
            )
        return rows

    @staticmethod
    def _random(params: EvaluationParameters, raw_data: pd.DataFrame) -> List[int]:
        seed = params.seed
        if (
            not isinstance(seed, Real)
            or isinstance(seed, bool)
            or not math.isfinite(seed)
        ):
            raise ConfigError("seed", "a finite numeric seed is required for random_sample")
        if params.dep_var not in raw_data.columns:
            raise DataError(params.dep_var, "dependent variable missing from raw data")

        # negative seeds wrap into the unsigned 32-bit range numpy accepts
        rng = np.random.default_rng(int(seed) % 2**32)
        positions = pd.Series(np.arange(len(raw_data)))
        labels = raw_data[params.dep_var].to_numpy()

        training: List[int] = []
        for _, group in positions.groupby(labels, sort=True):
            members = group.to_numpy()
            # single-member classes always go to training
            if len(members) == 1:
                n_train = 1
            else:
                n_train = math.ceil(params.train_percent * len(members))
            training.extend(rng.choice(members, size=n_train, replace=False).tolist())

        taken = set(training)
        return [p for p in range(len(raw_data)) if p not in taken]

    @staticmethod
    def _sequential(params: EvaluationParameters, raw_data: pd.DataFrame) -> List[int]:
        n = len(raw_data)
        start = int(round(params.train_percent * n))
        return list(range(start, n))
