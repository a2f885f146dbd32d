# =========================================================
# BRFSS 2015 DIABETES HEALTH INDICATORS
# EXPLORATORY DATA ANALYSIS
# =========================================================

import logging
from pathlib import Path

import matplotlib
matplotlib.use("Agg")  # headless backend
import matplotlib.pyplot as plt
import pandas as pd

from ml_model.config import settings
from ml_model.data import (
    INDICATORS, LABEL_MAPS, NUMERIC_MEASURES, POSITIVE_LABEL, RESPONSE,
    clean_data, load_data,
)

log = logging.getLogger(__name__)


# ---------------------------------------------------------
# Tables
# ---------------------------------------------------------

def response_balance(df):
    counts = df[RESPONSE].value_counts(sort=False)
    return pd.DataFrame({
        "count": counts,
        "proportion": counts / counts.sum(),
    })


def numeric_summary(df):
    return df.groupby(RESPONSE, observed=False)[NUMERIC_MEASURES].describe()


def prevalence_by(df, column):
    """Share of positive responses (and row count) per level of ``column``."""
    positive = df[RESPONSE] == POSITIVE_LABEL
    grouped = positive.groupby(df[column], observed=False)
    return pd.DataFrame({
        "n": grouped.size(),
        "prevalence": grouped.mean(),
    })


def indicator_prevalence(df, indicators=None):
    if indicators is None:
        indicators = INDICATORS
    positive = df[RESPONSE] == POSITIVE_LABEL

    rows = {}
    for col in indicators:
        rates = positive.groupby(df[col]).mean()
        rows[col] = {"when_0": rates.get(0), "when_1": rates.get(1)}
    return pd.DataFrame.from_dict(rows, orient="index", columns=["when_0", "when_1"])


# ---------------------------------------------------------
# Figures
# ---------------------------------------------------------

def plot_prevalence(df, column, out_dir):
    rates = prevalence_by(df, column)["prevalence"]

    fig, ax = plt.subplots(figsize=(8, 4))
    rates.plot(kind="bar", ax=ax)
    ax.set_ylabel("Share with diabetes")
    ax.set_xlabel(column)
    ax.set_title(f"Diabetes Prevalence by {column}")
    fig.tight_layout()

    path = Path(out_dir) / f"prevalence_by_{column.lower()}.png"
    fig.savefig(path, dpi=150)
    plt.close(fig)
    return path


def plot_bmi(df, out_dir):
    fig, ax = plt.subplots(figsize=(7, 4))
    for label, group in df.groupby(RESPONSE, observed=True):
        ax.hist(group["BMI"], bins=40, alpha=0.5, density=True, label=f"{RESPONSE}={label}")
    ax.set_xlabel("BMI")
    ax.set_ylabel("Density")
    ax.set_title("BMI by Diabetes Status")
    ax.legend()
    fig.tight_layout()

    path = Path(out_dir) / "bmi_by_response.png"
    fig.savefig(path, dpi=150)
    plt.close(fig)
    return path


def save_figures(df, out_dir):
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    paths = [plot_prevalence(df, col, out_dir) for col in LABEL_MAPS]
    paths.append(plot_bmi(df, out_dir))
    return paths


# ---------------------------------------------------------
# Script
# ---------------------------------------------------------

def main():
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
        format="%(asctime)s | %(levelname)-8s | %(message)s",
        datefmt="%H:%M:%S",
    )

    print("=" * 60)
    print("DIABETES HEALTH INDICATORS - EDA")
    print("=" * 60)

    df = clean_data(load_data(settings.DATA_PATH))
    print("\nDataset Loaded:", df.shape)

    print("\nResponse balance:\n", response_balance(df))
    print("\nMeasures by response:\n", numeric_summary(df).T)
    print("\nPrevalence by indicator:\n", indicator_prevalence(df))

    for col in LABEL_MAPS:
        print(f"\nPrevalence by {col}:\n", prevalence_by(df, col))

    paths = save_figures(df, settings.OUTPUT_DIR)

    print("\nSaved figures:")
    for path in paths:
        print(" ", path)
    print("=" * 60)


if __name__ == "__main__":
    main()
