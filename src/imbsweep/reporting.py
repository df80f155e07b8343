"""
Result tables and charts for a finished sweep.

Charts are rendered with the non-interactive ``Agg`` backend and written as
PNG files; nothing is ever shown on screen.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Dict, Sequence

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
import pandas as pd

from .serialization import save_table_csv

__all__ = [
    "write_tables",
    "plot_metrics",
    "plot_detection_rates",
    "save_figure",
    "ReportSink",
]

METRIC_LABELS = {
    "accuracy_test": "Accuracy",
    "precision_test": "Precision (A)",
    "recall_test": "Recall (A)",
    "f1_score_test": "F1 (A)",
    "auc_test": "AUC (B score)",
}


def _ensure_dir(p: Path) -> Path:
    p.mkdir(parents=True, exist_ok=True)
    return p


def write_tables(raw: pd.DataFrame, aggregated: pd.DataFrame, outdir: str | Path) -> Dict[str, Path]:
    out = _ensure_dir(Path(outdir))
    return {
        "raw": save_table_csv(raw, out / "raw_results.csv"),
        "aggregated": save_table_csv(aggregated, out / "aggregated_results.csv"),
    }


def plot_metrics(
    aggregated: pd.DataFrame,
    metrics: Sequence[str] = tuple(METRIC_LABELS),
    title: str = "Classifier performance vs group A share",
):
    """Line chart of the averaged metrics against ``Percent_A_to_all``."""
    df = aggregated.sort_values("Percent_A_to_all")
    fig, ax = plt.subplots(figsize=(8, 5))
    for col in metrics:
        ax.plot(df["Percent_A_to_all"], df[col], marker="o", markersize=3, label=METRIC_LABELS.get(col, col))
    ax.set_xlabel("Group A share of train + test rows (%)")
    ax.set_ylabel("Mean score")
    ax.set_ylim(0.0, 1.05)
    ax.set_title(title)
    ax.legend(loc="lower right")
    ax.grid(True, alpha=0.3)
    fig.tight_layout()
    return fig


def plot_detection_rates(
    aggregated: pd.DataFrame,
    title: str = "Correctly classified test rows per group",
):
    """Line chart of ``Percent_true_A`` and ``Percent_true_B`` against ``Percent_A_to_all``."""
    df = aggregated.sort_values("Percent_A_to_all")
    fig, ax = plt.subplots(figsize=(8, 5))
    ax.plot(df["Percent_A_to_all"], df["Percent_true_A"], marker="o", markersize=3, label="Group A")
    ax.plot(df["Percent_A_to_all"], df["Percent_true_B"], marker="s", markersize=3, label="Group B")
    ax.set_xlabel("Group A share of train + test rows (%)")
    ax.set_ylabel("Correctly classified (%)")
    ax.set_ylim(0.0, 105.0)
    ax.set_title(title)
    ax.legend(loc="best")
    ax.grid(True, alpha=0.3)
    fig.tight_layout()
    return fig


def save_figure(fig, title: str, outdir: str | Path, verbose: bool = False) -> Path:
    out_dir = _ensure_dir(Path(outdir))
    safe = re.sub(r"[^A-Za-z0-9_.-]+", "_", title).strip("_")
    out = out_dir / f"{safe}.png"
    fig.savefig(out, dpi=150)
    plt.close(fig)
    if verbose:
        print(f"[saved] {out}", flush=True)
    return out


class ReportSink:
    """Writes both tables and, optionally, both charts into ``outdir``."""

    def __init__(self, outdir: str | Path, *, plots: bool = True, verbose: bool = False) -> None:
        self.outdir = Path(outdir)
        self.plots = bool(plots)
        self.verbose = bool(verbose)

    def write(self, raw: pd.DataFrame, aggregated: pd.DataFrame) -> Dict[str, Path]:
        paths = write_tables(raw, aggregated, self.outdir)
        if self.verbose:
            for path in paths.values():
                print(f"[saved] {path}", flush=True)
        if self.plots and not aggregated.empty:
            figs_dir = self.outdir / "figs"
            paths["metrics_plot"] = save_figure(
                plot_metrics(aggregated), "metrics_vs_share", figs_dir, self.verbose
            )
            paths["detection_plot"] = save_figure(
                plot_detection_rates(aggregated), "detection_rates_vs_share", figs_dir, self.verbose
            )
        return paths
