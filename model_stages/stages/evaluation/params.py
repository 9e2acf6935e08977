# model_stages/stages/evaluation/params.py
from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any, List, Optional, Union

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    StrictFloat,
    StrictInt,
    ValidationError,
    ValidationInfo,
    field_validator,
)

from model_stages.utils.errors import ConfigError


class EvaluationParameters(BaseModel):
    """
    Resolved evaluation stage configuration

    - output          prefix of the CSV / PNG written by the validation plot
    - train_percent   fraction of rows used for training (``percent`` also accepted)
    - validation_rows explicit row positions held out for validation. Positions
                      are 0-based, so the R-style rows c(9, 10) are [8, 9] here.
                      An all-boolean list is read as a row mask.
    - dep_var .. id_term  column names in the raw dataset
    - id_column       identifying column copied into the output (None disables)
    - random_sample   stratified random partition instead of a sequential split
    - seed            required (numeric) when random_sample is set
    - times           number of random draws; only 1 is supported
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    output: str
    train_percent: float = Field(
        default=0.8,
        ge=0.0,
        le=1.0,
        validation_alias=AliasChoices("train_percent", "percent"),
    )
    validation_rows: Optional[List[StrictInt]] = None

    dep_var: str = "dep_var"
    dep_val: str = "dep_val"
    id_column: Optional[str] = "loan_id"
    id_benchmark: str = "sub_grade"
    id_installment: str = "installment"
    id_funded_amnt: str = "funded_amnt"
    id_term: str = "term"

    random_sample: bool = False
    seed: Optional[Union[StrictInt, StrictFloat]] = Field(
        default=None, validate_default=True
    )
    times: int = 1

    @field_validator("validation_rows", mode="before")
    @classmethod
    def _mask_to_positions(cls, v):
        # logical mask: keep the positions flagged True
        if isinstance(v, (list, tuple)) and v and all(isinstance(x, bool) for x in v):
            return [i for i, flag in enumerate(v) if flag]
        return v

    @field_validator("seed")
    @classmethod
    def _check_seed(cls, v, info: ValidationInfo):
        if info.data.get("random_sample") and v is None:
            raise ValueError("a numeric seed is required when random_sample is true")
        if isinstance(v, float) and not math.isfinite(v):
            raise ValueError(f"seed must be a finite number, got {v}")
        return v

    @field_validator("times")
    @classmethod
    def _single_draw_only(cls, v: int) -> int:
        if v != 1:
            raise ValueError(f"only times=1 is supported, got {v}")
        return v

    # --------------------------------------------------
    @classmethod
    def from_options(cls, options: Any) -> "EvaluationParameters":
        """
        Validate raw stage options; every failure becomes a ConfigError.
        """
        if not isinstance(options, Mapping):
            raise ConfigError(
                None,
                f"evaluation options must be a mapping, got {type(options).__name__}",
            )

        if "output" not in options:
            raise ConfigError("output", "the evaluation stage requires an output prefix")

        try:
            return cls.model_validate(dict(options))
        except ValidationError as e:
            err = e.errors()[0]
            # union members add a nested loc entry, keep the field name only
            field = str(err["loc"][0]) if err["loc"] else None
            raise ConfigError(field, err["msg"]) from e
