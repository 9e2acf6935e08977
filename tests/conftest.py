# tests/conftest.py
from __future__ import annotations

from types import SimpleNamespace
from typing import Any, List, Tuple

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pandas as pd
import pytest
from loguru import logger

from model_stages import set_settings, StageSettings
from model_stages.adapters import AdapterRegistry, BaseAdapter
from model_stages.pipeline import ModelingContext


@pytest.fixture(autouse=True)
def disable_file_logger():
    logger.remove()
    logger.add(lambda msg: None)
    yield


@pytest.fixture(autouse=True)
def default_settings():
    set_settings(StageSettings())
    yield
    set_settings(None)


# ============================================================
# adapters
# ============================================================
class RecordingAdapter(BaseAdapter):
    """Appends (keyword, artifact, options) to a shared list."""

    def __init__(self, keyword: str, sink: List[Tuple[str, Any, Any]]):
        self.keyword = keyword
        super().__init__()
        self._sink = sink

    def write(self, artifact, options):
        self._sink.append((self.keyword, artifact, options))


class FailingAdapter(BaseAdapter):
    keyword = "broken"

    def write(self, artifact, options):
        raise IOError(f"cannot reach {options}")


@pytest.fixture
def writes() -> List[Tuple[str, Any, Any]]:
    return []


@pytest.fixture
def registry(writes) -> AdapterRegistry:
    reg = AdapterRegistry(default_keyword="file")
    reg.register("file")(lambda: RecordingAdapter("file", writes))
    reg.register("s3")(lambda: RecordingAdapter("s3", writes))
    reg.register("broken")(FailingAdapter)
    return reg


# ============================================================
# model / data
# ============================================================
class FakeSurvivalModel:
    """
    Linear score = 0.1 * x, baseline survival 0.995 ** t for t = 1..60.
    """

    def __init__(self, periods: int = 60):
        t = np.arange(1, periods + 1)
        self.output = SimpleNamespace(baseline_fcn=0.995 ** t)
        self.predict_calls = 0

    def predict(self, data: pd.DataFrame):
        self.predict_calls += 1
        return data["x"].to_numpy() * 0.1


@pytest.fixture
def model() -> FakeSurvivalModel:
    return FakeSurvivalModel()


def make_loans(n: int = 100) -> pd.DataFrame:
    """
    Synthetic loan book: 36-month loans at 1% monthly,
    balanced default flag, five sub grades.
    """
    funded = 1000.0
    rate = 0.01
    installment = funded * rate / (1 - (1 + rate) ** -36)

    idx = np.arange(n)
    return pd.DataFrame(
        {
            "loan_id": [f"L{i:04d}" for i in idx],
            "dep_var": idx % 2,
            "dep_val": (idx % 7) * 10.0,
            "sub_grade": np.array(["A1", "B2", "C3", "D4", "E5"])[idx % 5],
            "installment": installment,
            "funded_amnt": funded,
            "term": 36,
            "x": np.linspace(-1.0, 1.0, n),
        }
    )


@pytest.fixture
def loans() -> pd.DataFrame:
    return make_loans(100)


@pytest.fixture
def loan_factory():
    return make_loans


@pytest.fixture
def make_ctx(model, loans):
    """
    Factory fixture for ModelingContext (testing only).

        ctx = make_ctx()
        ctx = make_ctx(validation_primary_key={"L0001"})
    """

    def _make(**overrides) -> ModelingContext:
        kwargs = dict(model=model, raw_data=loans)
        kwargs.update(overrides)
        return ModelingContext.start(**kwargs)

    return _make
