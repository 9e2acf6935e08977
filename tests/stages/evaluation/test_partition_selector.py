#!filepath: tests/stages/evaluation/test_partition_selector.py
from __future__ import annotations

import pandas as pd
import pytest

from model_stages import ConfigError, DataError
from model_stages.stages.evaluation import EvaluationParameters, PartitionSelector
from model_stages.stages.evaluation.partition import (
    EXPLICIT_ROWS,
    EXTERNAL_KEY,
    RANDOM,
    SEQUENTIAL,
)


def params(**kw) -> EvaluationParameters:
    return EvaluationParameters.from_options({"output": "o", **kw})


@pytest.fixture
def selector() -> PartitionSelector:
    return PartitionSelector()


# =============================================================================
# sequential
# =============================================================================

def test_sequential_tail_of_ten_rows(selector, make_ctx, loan_factory):
    data = loan_factory(10)
    ctx = make_ctx(raw_data=data)

    # rows 9 and 10 (1-indexed)
    assert selector.select(ctx, params(), data) == [8, 9]


def test_sequential_tail_of_hundred_rows(selector, make_ctx, loans):
    rows = selector.select(make_ctx(), params(), loans)

    assert rows == list(range(80, 100))


def test_sequential_respects_train_percent(selector, make_ctx, loans):
    rows = selector.select(make_ctx(), params(percent=0.5), loans)

    assert rows == list(range(50, 100))


# =============================================================================
# precedence
# =============================================================================

def test_external_key_wins_over_explicit_rows(selector, make_ctx, loans):
    ctx = make_ctx(validation_primary_key={"L0003", "L0007"})
    p = params(validation_rows=[50, 51, 52], random_sample=True, seed=1)

    assert selector.strategy_for(ctx, p) == EXTERNAL_KEY
    assert selector.select(ctx, p, loans) == [3, 7]


def test_explicit_rows_win_over_random(selector, make_ctx, loans):
    p = params(validation_rows=[5, 1, 3], random_sample=True, seed=1)

    assert selector.strategy_for(make_ctx(), p) == EXPLICIT_ROWS
    assert selector.select(make_ctx(), p, loans) == [5, 1, 3]


def test_random_wins_over_sequential(selector, make_ctx):
    assert selector.strategy_for(make_ctx(), params(random_sample=True, seed=1)) == RANDOM
    assert selector.strategy_for(make_ctx(), params()) == SEQUENTIAL


def test_empty_external_key_selects_nothing(selector, make_ctx, loans):
    ctx = make_ctx(validation_primary_key=set())

    assert selector.select(ctx, params(validation_rows=[1]), loans) == []


# =============================================================================
# random
# =============================================================================

def test_random_is_deterministic_for_a_seed(selector, make_ctx, loans):
    p = params(random_sample=True, seed=42)

    first = selector.select(make_ctx(), p, loans)
    second = selector.select(make_ctx(), p, loans)

    assert first == second
    assert first != list(range(80, 100))


def test_random_is_stratified_by_dep_var(selector, make_ctx, loans):
    rows = selector.select(make_ctx(), params(random_sample=True, seed=42), loans)

    # 50 rows per class, ceil(0.8 * 50) = 40 trained per class
    assert len(rows) == 20
    assert loans.iloc[rows]["dep_var"].value_counts().to_dict() == {0: 10, 1: 10}
    assert rows == sorted(rows)


def test_random_single_member_class_goes_to_training(selector, make_ctx):
    data = pd.DataFrame({"dep_var": [0, 0, 0, 0, 1]})

    rows = selector.select(make_ctx(raw_data=data), params(random_sample=True, seed=7), data)

    assert 4 not in rows
    # ceil(0.8 * 4) = 4, every class-0 row is trained
    assert rows == []


def test_random_accepts_negative_seed(selector, make_ctx, loans):
    rows = selector.select(make_ctx(), params(random_sample=True, seed=-5), loans)
    again = selector.select(make_ctx(), params(random_sample=True, seed=-5), loans)

    assert rows == again
    assert rows
    assert all(0 <= r < len(loans) for r in rows)


@pytest.mark.parametrize("seed", [float("nan"), float("inf")])
def test_random_rejects_non_finite_seed(selector, make_ctx, loans, seed):
    p = EvaluationParameters.model_construct(
        **{**params().model_dump(), "random_sample": True, "seed": seed}
    )

    with pytest.raises(ConfigError) as exc:
        selector.select(make_ctx(), p, loans)

    assert exc.value.field == "seed"


def test_boolean_mask_selects_flagged_rows(selector, make_ctx, loans):
    mask = [i in (3, 7) for i in range(len(loans))]

    assert selector.select(make_ctx(), params(validation_rows=mask), loans) == [3, 7]


def test_random_requires_numeric_seed(selector, make_ctx, loans):
    p = EvaluationParameters.model_construct(
        **{**params().model_dump(), "random_sample": True, "seed": None}
    )

    with pytest.raises(ConfigError):
        selector.select(make_ctx(), p, loans)


# =============================================================================
# errors
# =============================================================================

def test_explicit_rows_out_of_range(selector, make_ctx, loans):
    with pytest.raises(DataError) as exc:
        selector.select(make_ctx(), params(validation_rows=[99, 100]), loans)

    assert exc.value.field == "validation_rows"


def test_external_key_needs_id_column(selector, make_ctx, loans):
    ctx = make_ctx(validation_primary_key={"L0001"})

    with pytest.raises(DataError) as exc:
        selector.select(ctx, params(id_column="missing_id"), loans)
    assert exc.value.field == "missing_id"

    with pytest.raises(ConfigError):
        selector.select(ctx, params(id_column=None), loans)
