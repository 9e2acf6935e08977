from __future__ import annotations

from pathlib import Path
from typing import Optional

import matplotlib.pyplot as plt
import pandas as pd

from model_stages import logs


class ValidationReportEngine:
    """
    ValidationReportEngine

    Responsibility:
    - Persist the validation outputs under the ``output`` prefix
        <output>.csv  dep_var, dep_val (+ id column)
        <output>.png  mean IRR per benchmark bucket, model vs contractual
    """

    @logs.catch("failed to write validation csv")
    def write_csv(
        self,
        prediction_data: pd.DataFrame,
        output: str,
        id_column: Optional[str] = None,
    ) -> Path:
        path = Path(f"{output}.csv")
        path.parent.mkdir(parents=True, exist_ok=True)

        columns = ["dep_var", "dep_val"]
        if id_column is not None and id_column in prediction_data.columns:
            columns.append(id_column)

        prediction_data[columns].to_csv(path, index=False)
        return path

    @logs.catch("failed to plot IRR buckets")
    def plot_irr_buckets(self, comparison: pd.DataFrame, output: str) -> Path:
        path = Path(f"{output}.png")
        path.parent.mkdir(parents=True, exist_ok=True)

        buckets = (
            comparison.groupby("benchmark", sort=True)[["model_irr", "baseline_irr"]]
            .mean()
        )
        xs = [str(b) for b in buckets.index]

        plt.figure(figsize=(10, 4))
        plt.plot(xs, buckets["model_irr"], color="darkgreen", lw=3, label="model")
        plt.plot(xs, buckets["baseline_irr"], linestyle="--", label="contractual")
        plt.title("IRR v.s. benchmark id buckets")
        plt.xlabel("benchmark id buckets")
        plt.ylabel("IRR")
        plt.legend()
        plt.tight_layout()
        plt.savefig(path)
        plt.close()

        return path
