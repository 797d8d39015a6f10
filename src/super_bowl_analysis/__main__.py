"""Command-line entry: python -m src.super_bowl_analysis"""
import argparse
import sys
from typing import List, Optional

from src.super_bowl_analysis.config import config
from src.super_bowl_analysis.eda import run_full_analysis


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Super Bowl offense analysis - clean, merge and model championship game data"
    )
    parser.add_argument("--plays", default=str(config.PLAYS_FILE), help="Play-by-play CSV")
    parser.add_argument("--offense", default=str(config.OFFENSE_FILE), help="Wide offense CSV")
    parser.add_argument("--superbowls", default=str(config.SUPERBOWL_FILE), help="Super Bowl results CSV")
    parser.add_argument("--output-dir", "-o", default=str(config.OUTPUT_DIR),
                        help="Directory for figures and model summaries")
    parser.add_argument("--save-merged", action="store_true",
                        help=f"Also write the merged table to {config.MERGED_DATA_FILE}")
    parser.add_argument("--strict", action="store_true",
                        help="Fail on malformed offense composites instead of zero-filling them")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    _, reports = run_full_analysis(
        args.plays,
        args.offense,
        args.superbowls,
        output_dir=args.output_dir,
        save_merged=args.save_merged,
        policy="raise" if args.strict else "coerce",
    )
    skipped = [name for name, report in reports.items() if not report.ok]
    print(f"\n******* Finished: {len(reports) - len(skipped)} model(s) fitted"
          + (f", skipped: {', '.join(skipped)}" if skipped else ""))
    return 0


if __name__ == "__main__":
    sys.exit(main())
