"""
Super Bowl Offense EDA & Reporting Utilities

"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Tuple

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import seaborn as sns

from src.super_bowl_analysis.config import config
from src.super_bowl_analysis.data.loader import DataLoader
from src.super_bowl_analysis.data.preprocessor import build_analysis_table
from src.super_bowl_analysis.models import ModelReport, run_all_models

# ───────────────────── configuration ────────────────────────────
logger = logging.getLogger(__name__)
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s │ %(levelname)s │ %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

plt.rcParams.update({
    "figure.figsize": config.FIGURE_SIZE,
    "axes.spines.top": False,
    "axes.spines.right": False,
})
sns.set_palette("husl")


def _save(fig: plt.Figure, savefig: Path | None) -> None:
    plt.tight_layout()
    if savefig:
        fig.savefig(savefig, dpi=config.DPI, bbox_inches="tight")


# ───────────────────────── overview ──────────────────────────
def basic_overview(df: pd.DataFrame) -> pd.Series:
    """Print schema info and return per-column missing counts."""
    print("\n─ BASIC OVERVIEW ─")
    print(df.dtypes)
    print(f"\nRows: {len(df):,}  Teams: {df['Team'].nunique()}  "
          f"Categories: {df['Category'].nunique() if 'Category' in df.columns else 'n/a'}")
    dupe = df.duplicated().sum()
    if dupe:
        logger.warning("%d duplicate rows detected", dupe)
    missing = df.isna().sum()
    print("\nMissing cells per column:")
    print(missing[missing > 0] if missing.any() else "none")
    return missing


# ───────────────────────── figures ──────────────────────────
def points_histogram(df: pd.DataFrame, savefig: Path | None = None) -> plt.Figure:
    """Histogram of winner points."""
    fig, ax = plt.subplots(figsize=(10, 6))
    sns.histplot(df["Pts"], bins=15, edgecolor="black", color="skyblue", ax=ax)
    ax.axvline(df["Pts"].mean(), color="red", linestyle="--", label="Mean")
    ax.set_title("Distribution of Winning Points")
    ax.set_xlabel("Points")
    ax.legend()
    _save(fig, savefig)
    return fig


def points_by_sacked_boxplot(df: pd.DataFrame, savefig: Path | None = None) -> plt.Figure:
    """Boxplot of points by sacked-yards level."""
    fig, ax = plt.subplots(figsize=(10, 6))
    sns.boxplot(
        x=df["SackedYards"].astype(str),
        y=df["Pts"],
        ax=ax,
        color="lightgreen",
    )
    ax.set_title("Points by Sacked-Yards Level")
    ax.set_xlabel("Sacked-Yards")
    ax.set_ylabel("Points")
    _save(fig, savefig)
    return fig


def rush_yards_scatter(df: pd.DataFrame, savefig: Path | None = None) -> Tuple[np.ndarray | None, plt.Figure]:
    """Scatter of rush yards vs points with a linear trend line."""
    fig, ax = plt.subplots(figsize=(10, 6))
    ax.scatter(df["RushYards"], df["Pts"], alpha=0.6, color="darkblue")

    coefs = None
    if df["RushYards"].nunique() >= 2:
        coefs = np.polyfit(df["RushYards"], df["Pts"], 1)
        xs = np.unique(df["RushYards"])
        ax.plot(xs, np.poly1d(coefs)(xs), "r--", linewidth=2)
    else:
        logger.warning("Rush yards are constant - trend line skipped")

    ax.set_title("Points vs Rush Yards")
    ax.set_xlabel("Rush Yards")
    ax.set_ylabel("Points")
    _save(fig, savefig)
    return coefs, fig


def third_down_bar_chart(df: pd.DataFrame, savefig: Path | None = None) -> Tuple[pd.Series, plt.Figure]:
    """Bar chart of third-down conversions per location."""
    per_location = df.groupby("Location")["ThirdDownConversions"].max().sort_values(ascending=False)

    fig, ax = plt.subplots(figsize=(10, 6))
    sns.barplot(x=per_location.index.astype(str), y=per_location.values, color="orange", ax=ax)
    ax.set_title("Third-Down Conversions by Team Location")
    ax.set_xlabel("Location")
    ax.set_ylabel("Conversions")
    for i, v in enumerate(per_location.values):
        ax.text(i, v, f"{v:g}", ha="center", va="bottom")
    _save(fig, savefig)
    return per_location, fig


# ───────────────────────── sanity guards ─────────────────────────
def quick_sanity_checks(df: pd.DataFrame) -> None:
    """
    Fast data-quality assertions.

    Raises when a modelling column still has missing cells. A constant Win
    column is only logged: it is the expected outcome of joining on the winner.
    """
    missing = df[config.MODELING_COLUMNS].isna().sum()
    missing = missing[missing > 0]
    if not missing.empty:
        raise AssertionError(f"Missing values in modelling columns: {missing.to_dict()}")

    if df["SackedYards"].dtype.name == "category" and len(df["SackedYards"].cat.categories) < 2:
        raise AssertionError("SackedYards must carry at least two levels")

    if df["Win"].nunique() < 2:
        logger.warning(
            "Win is constant (%s) - every row was joined on the winning team, "
            "so the logistic and k-NN stages cannot learn anything from it",
            df["Win"].unique().tolist(),
        )
    else:
        logger.info("Sanity checks passed")


def write_reports(reports: Dict[str, ModelReport], output_dir: Path) -> None:
    """Write each model summary to ``<name>_summary.txt``."""
    for name, report in reports.items():
        path = output_dir / f"{name}_summary.txt"
        path.write_text(report.summary + "\n")
        logger.info("Saved %s summary (%s) to %s", name, report.status, path)


# ───────────────────── orchestrator API ─────────────────────
def run_full_analysis(
    plays_csv: Path | str | None = None,
    offense_csv: Path | str | None = None,
    superbowl_csv: Path | str | None = None,
    *,
    output_dir: Path | str = config.OUTPUT_DIR,
    save_merged: bool = False,
    policy: str = config.COMPOSITE_POLICY,
) -> Tuple[pd.DataFrame, Dict[str, ModelReport]]:
    """Single convenience entry – load, clean, plot and fit everything."""
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    print("── Section 1 Load ──")
    loader = DataLoader()
    plays, offense, superbowls = loader.load_all(plays_csv, offense_csv, superbowl_csv)

    print("── Section 2 Clean & Merge ──")
    df = build_analysis_table(plays, offense, superbowls, policy=policy)
    basic_overview(df)

    if save_merged:
        config.MERGED_DATA_FILE.parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(config.MERGED_DATA_FILE, index=False)
        logger.info("Merged table saved → %s (%s rows)", config.MERGED_DATA_FILE, len(df))

    print("── Section 3 Figures ──")
    figures = [
        points_histogram(df, output_dir / "points_histogram.png"),
        points_by_sacked_boxplot(df, output_dir / "points_by_sacked.png"),
        rush_yards_scatter(df, output_dir / "rush_yards_scatter.png")[1],
        third_down_bar_chart(df, output_dir / "third_down_conversions.png")[1],
    ]
    for fig in figures:
        plt.close(fig)

    print("── Section 4 Models ──")
    reports = run_all_models(df)
    write_reports(reports, output_dir)
    for report in reports.values():
        print(f"\n=== {report.name.upper()} [{report.status}] ===")
        print(report.summary)

    print("── Section 5 Sanity Checks ──")
    quick_sanity_checks(df)

    logger.info("All figures and summaries saved in %s", output_dir.resolve())
    return df, reports
