# model_stages/stages/evaluation/irr.py
from __future__ import annotations

import math
from typing import Any, Optional, Sequence

import numpy as np
import pandas as pd
from scipy.optimize import brentq

from model_stages import logs
from model_stages.utils.errors import DataError

# monthly rate search bracket
_RATE_LO = -0.99
_RATE_HI = 1.0

COMPARISON_COLUMNS = ("benchmark", "model_irr", "baseline_irr")


def coerce_term(term: Any) -> int:
    """
    Number of payment periods. Accepts ints, integral floats and
    strings such as " 36 months".
    """
    if isinstance(term, str):
        head = term.strip().split()
        try:
            value = int(head[0]) if head else None
        except ValueError:
            value = None
    elif isinstance(term, (int, np.integer)):
        value = int(term)
    elif isinstance(term, (float, np.floating)) and float(term).is_integer():
        value = int(term)
    else:
        value = None

    if value is None or value < 1:
        raise DataError("term", f"invalid term value: {term!r}")
    return value


def survival_probabilities(
    baseline_fcn: Sequence[float], term: Any, score: float
) -> np.ndarray:
    """
    Proportional-hazards scaling of the baseline curve:

        S_i(t) = S_0(t) ** exp(score),   t = 1..term
    """
    curve = np.asarray(baseline_fcn, dtype=float)
    periods = coerce_term(term)

    if periods > len(curve):
        raise DataError(
            "term",
            f"term {periods} exceeds survival curve length {len(curve)}",
        )

    return curve[:periods] ** math.exp(float(score))


def calc_irr(
    use_model: bool,
    record: Any,
    survival_probs: Optional[Sequence[float]] = None,
    periods_per_year: int = 12,
) -> float:
    """
    Annualised IRR of one loan.

    Cashflows: -funded_amnt at t=0, then installment * w_t for t=1..term,
    where w_t is the survival probability when ``use_model`` is true and 1
    (contractual schedule) otherwise.
    """
    periods = coerce_term(getattr(record, "term"))
    installment = float(getattr(record, "installment"))
    funded = float(getattr(record, "funded_amnt"))

    if funded <= 0:
        raise DataError("funded_amnt", f"must be positive, got {funded}")
    if installment <= 0:
        raise DataError("installment", f"must be positive, got {installment}")

    if use_model:
        if survival_probs is None:
            raise DataError("survival_probs", "required when use_model is true")
        weights = np.asarray(survival_probs, dtype=float)
        if len(weights) != periods:
            raise DataError(
                "survival_probs",
                f"expected {periods} probabilities, got {len(weights)}",
            )
    else:
        weights = np.ones(periods)

    cashflows = installment * weights
    t = np.arange(1, periods + 1)

    def npv(rate: float) -> float:
        return float(-funded + np.sum(cashflows / (1.0 + rate) ** t))

    lo, hi = npv(_RATE_LO), npv(_RATE_HI)
    if lo * hi > 0:
        raise DataError("irr", "cashflows have no internal rate of return in range")

    monthly = brentq(npv, _RATE_LO, _RATE_HI, xtol=1e-12)
    return (1.0 + monthly) ** periods_per_year - 1.0


class IRRComparator:
    """
    IRRComparator

    For each scored row: model-implied IRR (cashflows weighted by the
    row's scaled survival curve) against the contractual IRR.
    Output rows follow input order.
    """

    def __init__(self, periods_per_year: int = 12):
        self.periods_per_year = periods_per_year

    def compare(
        self,
        prediction_data: pd.DataFrame,
        survival_curve: Sequence[float],
    ) -> pd.DataFrame:
        rows = []
        for record in prediction_data.itertuples(index=False):
            probs = survival_probabilities(survival_curve, record.term, record.score)
            rows.append(
                (
                    record.benchmark,
                    calc_irr(True, record, probs, self.periods_per_year),
                    calc_irr(False, record, periods_per_year=self.periods_per_year),
                )
            )

        comparison = pd.DataFrame(rows, columns=list(COMPARISON_COLUMNS))
        logs.info(f"[IRRComparator] compared {len(comparison)} rows")
        return comparison
