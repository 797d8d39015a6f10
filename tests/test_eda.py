"""
Tests for figures, sanity checks and the end-to-end analysis run.
"""
import os
import sys

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import pandas as pd
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from src.super_bowl_analysis.__main__ import main
from src.super_bowl_analysis.config import config
from src.super_bowl_analysis.data.loader import DataLoader
from src.super_bowl_analysis.data.preprocessor import build_analysis_table
from src.super_bowl_analysis.eda import (
    basic_overview,
    points_by_sacked_boxplot,
    points_histogram,
    quick_sanity_checks,
    run_full_analysis,
    rush_yards_scatter,
    third_down_bar_chart,
)
from sample_data import OFFENSE_ROWS, write_sample_csvs


@pytest.fixture
def sample_paths(tmp_path):
    return write_sample_csvs(tmp_path)


@pytest.fixture
def table(sample_paths):
    return build_analysis_table(*DataLoader().load_all(*sample_paths))


def test_figures_are_written(table, tmp_path):
    figs = [
        points_histogram(table, tmp_path / "hist.png"),
        points_by_sacked_boxplot(table, tmp_path / "box.png"),
    ]
    coefs, scatter = rush_yards_scatter(table, tmp_path / "scatter.png")
    per_location, bars = third_down_bar_chart(table, tmp_path / "bars.png")
    figs += [scatter, bars]

    for name in ("hist.png", "box.png", "scatter.png", "bars.png"):
        assert (tmp_path / name).stat().st_size > 0
    assert coefs is not None and len(coefs) == 2
    assert per_location.to_dict() == {"KAN": 2, "SFO": 1}
    for fig in figs:
        plt.close(fig)


def test_scatter_without_spread_skips_trend(table):
    coefs, fig = rush_yards_scatter(table.assign(RushYards=100.0))
    assert coefs is None
    plt.close(fig)


def test_basic_overview_reports_no_missing(table, capsys):
    missing = basic_overview(table)
    assert missing.sum() == 0
    assert "BASIC OVERVIEW" in capsys.readouterr().out


def test_sanity_checks_flag_constant_win(table, caplog):
    with caplog.at_level("WARNING"):
        quick_sanity_checks(table)
    assert "Win is constant" in caplog.text


def test_sanity_checks_raise_on_missing(table):
    broken = table.copy()
    broken["RushYards"] = broken["RushYards"].astype(float)
    broken.loc[broken.index[0], "RushYards"] = float("nan")
    with pytest.raises(AssertionError):
        quick_sanity_checks(broken)


def test_run_full_analysis(sample_paths, tmp_path, monkeypatch):
    merged_file = tmp_path / "processed" / "merged.csv"
    monkeypatch.setattr(config, "MERGED_DATA_FILE", merged_file)
    out = tmp_path / "out"

    df, reports = run_full_analysis(*sample_paths, output_dir=out, save_merged=True)

    assert len(df) == 2 * OFFENSE_ROWS
    assert (df["Win"] == 1).all()
    assert reports["ols"].ok and reports["anova"].ok and reports["stepwise"].ok
    assert reports["logit"].status == "insufficient data"
    assert reports["knn"].status == "insufficient data"
    for name in reports:
        assert (out / f"{name}_summary.txt").exists()
    assert len(list(out.glob("*.png"))) == 4
    assert len(pd.read_csv(merged_file)) == len(df)


def test_missing_input_aborts(sample_paths, tmp_path):
    plays, offense, _ = sample_paths
    with pytest.raises(FileNotFoundError):
        run_full_analysis(plays, offense, tmp_path / "missing.csv", output_dir=tmp_path / "out")


def test_cli(sample_paths, tmp_path):
    plays, offense, superbowls = sample_paths
    out = tmp_path / "cli"
    code = main(["--plays", str(plays), "--offense", str(offense),
                 "--superbowls", str(superbowls), "--output-dir", str(out)])
    assert code == 0
    assert (out / "ols_summary.txt").exists()
