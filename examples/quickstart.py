"""
Quickstart example for the imbsweep package.

Runs a short sweep with logistic regression and writes the result tables and
charts under ``runs_quickstart/``.  Run with:

    python examples/quickstart.py
"""

from __future__ import annotations

from imbsweep import SweepConfig, run_sweep
from imbsweep.reporting import ReportSink


def main() -> None:
    config = SweepConfig(num_configs=46, iterations_per_config=5)
    result = run_sweep(config)

    print(result.aggregated[["Percent_A_to_all", "accuracy_test", "precision_test",
                             "recall_test", "auc_test", "Percent_true_A", "Percent_true_B"]])
    ReportSink("runs_quickstart", plots=True, verbose=True).write(result.raw, result.aggregated)


if __name__ == "__main__":
    main()
