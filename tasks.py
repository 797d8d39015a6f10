# tasks.py  ── invoke ≥2.2
from invoke import task  # type: ignore
from typing import Optional

import pathlib
import shutil


BASE_ENV = pathlib.Path(__file__).parent


@task(
    help={
        "plays": "Play-by-play CSV (default: data/raw/super_bowl_plays.csv)",
        "offense": "Wide offense CSV (default: data/raw/super_bowl_offense.csv)",
        "superbowls": "Super Bowl results CSV (default: data/raw/superbowl.csv)",
        "output_dir": "Where figures and model summaries go (default: output/)",
        "save_merged": "Also write the merged table to data/processed/",
        "strict": "Fail on malformed offense composites",
    }
)
def analyze(
    c,
    plays: Optional[str] = None,
    offense: Optional[str] = None,
    superbowls: Optional[str] = None,
    output_dir: Optional[str] = None,
    save_merged: bool = False,
    strict: bool = False,
) -> None:
    """Run the full cleaning → modelling → reporting pipeline."""
    args = []
    for flag, value in (("--plays", plays), ("--offense", offense),
                        ("--superbowls", superbowls), ("--output-dir", output_dir)):
        if value:
            args.append(f"{flag} {value}")
    if save_merged:
        args.append("--save-merged")
    if strict:
        args.append("--strict")
    c.run(f"python -m src.super_bowl_analysis {' '.join(args)}", pty=False)


@task(help={"k": "Only run tests matching this expression"})
def test(c, k: Optional[str] = None) -> None:
    """Run the test suite with pytest."""
    cmd = "pytest tests"
    if k:
        cmd += f" -k '{k}'"
    c.run(cmd, pty=False)


@task
def clean(c) -> None:
    """Remove generated figures, summaries and processed data."""
    for rel in ("output", "data/processed"):
        path = BASE_ENV / rel
        if path.exists():
            shutil.rmtree(path)
            print(f"🗑️  Removed {path}")
