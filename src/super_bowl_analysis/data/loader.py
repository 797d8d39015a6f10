"""
Data loading module for Super Bowl analysis.
Handles reading the three raw datasets.
"""
import logging
from pathlib import Path
from typing import Optional, Tuple

import pandas as pd

from src.super_bowl_analysis.config import config

logger = logging.getLogger(__name__)

# Some exports of the Super Bowl table spell the points columns out
_SUPERBOWL_RENAMES = {"Winner Pts": "Pts", "Loser Pts": "Pts.1"}


class DataLoader:
    """Handles loading of the play-by-play, offense and Super Bowl datasets."""

    def __init__(self):
        """Initialize the data loader."""
        self.plays_df = None
        self.offense_df = None
        self.superbowl_df = None

    def _read_csv(self, filepath: Path, label: str, **read_kwargs) -> pd.DataFrame:
        try:
            df = pd.read_csv(filepath, **read_kwargs)
        except FileNotFoundError:
            raise FileNotFoundError(f"{label} data file not found: {filepath}")
        print(f"******* Loaded {len(df)} {label.lower()} rows from {filepath}")
        return df

    def load_plays(self, filepath: Optional[Path] = None) -> pd.DataFrame:
        """
        Load play-by-play events.

        Args:
            filepath: Optional path to the plays CSV file

        Returns:
            DataFrame with one row per play, values as read
        """
        if filepath is None:
            filepath = config.PLAYS_FILE
        self.plays_df = self._read_csv(filepath, "Plays")
        return self.plays_df

    def load_offense(self, filepath: Optional[Path] = None) -> pd.DataFrame:
        """
        Load the wide offense table (one column per team).

        Args:
            filepath: Optional path to the offense CSV file

        Returns:
            DataFrame with one row per offensive category
        """
        if filepath is None:
            filepath = config.OFFENSE_FILE
        # Composite cells must stay text so "12" and "-5-20-2-1" survive intact
        self.offense_df = self._read_csv(filepath, "Offense", dtype=str)
        return self.offense_df

    def load_superbowls(self, filepath: Optional[Path] = None) -> pd.DataFrame:
        """
        Load historical Super Bowl results.

        The raw file repeats the ``Pts`` header; pandas names the loser's
        column ``Pts.1``.

        Args:
            filepath: Optional path to the Super Bowl CSV file

        Returns:
            DataFrame with one row per game
        """
        if filepath is None:
            filepath = config.SUPERBOWL_FILE
        df = self._read_csv(filepath, "Super Bowl")
        df = df.rename(columns=_SUPERBOWL_RENAMES)
        for col in ("Winner", "Pts", "Pts.1"):
            if col not in df.columns:
                logger.warning("Super Bowl file %s has no %r column", filepath, col)
        self.superbowl_df = df
        return self.superbowl_df

    def load_all(
        self,
        plays_path: Optional[Path] = None,
        offense_path: Optional[Path] = None,
        superbowl_path: Optional[Path] = None,
    ) -> Tuple[pd.DataFrame, pd.DataFrame, pd.DataFrame]:
        """
        Load all three datasets in one call.

        Returns:
            (plays, offense, superbowls)
        """
        return (
            self.load_plays(plays_path),
            self.load_offense(offense_path),
            self.load_superbowls(superbowl_path),
        )

    def get_data_summary(self) -> dict:
        """
        Get summary information about the loaded data.

        Returns:
            Dictionary with data summary information
        """
        if self.plays_df is None or self.offense_df is None or self.superbowl_df is None:
            raise ValueError("No data loaded. Call load_all() first.")

        summary = {
            'plays': len(self.plays_df),
            'offense_categories': len(self.offense_df),
            'offense_teams': self.offense_df.columns[1:].tolist(),
            'super_bowls': len(self.superbowl_df),
            'date_range': None,
        }
        if 'Date' in self.superbowl_df.columns:
            dates = pd.to_datetime(self.superbowl_df['Date'], errors='coerce')
            summary['date_range'] = (dates.min(), dates.max())
        return summary


if __name__ == "__main__":
    print("Testing DataLoader...")

    loader = DataLoader()

    try:
        loader.load_all()
        summary = loader.get_data_summary()
        print("\nData Summary:")
        print(summary)
        print("******* DataLoader checks passed!")

    except FileNotFoundError as e:
        print(f"------------- Error testing DataLoader: {e}")
        print("Note: This is expected if data files are not present.")
