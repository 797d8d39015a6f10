"""
Configuration module for the Super Bowl offense analysis package.
Contains all constants, paths, and configuration parameters.
"""
from pathlib import Path
from typing import Dict, Tuple


class Config:
    """Main configuration class for the Super Bowl analysis package."""

    # Base paths - resolved from this file so they work from any working directory
    _CONFIG_DIR = Path(__file__).parent.parent.parent  # Go up to project root
    PROJECT_ROOT = _CONFIG_DIR.resolve()

    DATA_DIR = PROJECT_ROOT / "data"
    RAW_DATA_DIR = DATA_DIR / "raw"
    PROCESSED_DATA_DIR = DATA_DIR / "processed"
    OUTPUT_DIR = PROJECT_ROOT / "output"

    # Raw data files
    PLAYS_FILE = RAW_DATA_DIR / "super_bowl_plays.csv"
    OFFENSE_FILE = RAW_DATA_DIR / "super_bowl_offense.csv"
    SUPERBOWL_FILE = RAW_DATA_DIR / "superbowl.csv"

    # Processed data files
    MERGED_DATA_FILE = PROCESSED_DATA_DIR / "super_bowl_merged.csv"

    # Composite offense strings: firstdowns-rush-passing-sacked
    COMPOSITE_DELIMITER = "-"
    COMPOSITE_FIELDS = ["FirstDowns", "RushYdsTDs", "CmpAttYdTDINT", "SackedYards"]
    COMPOSITE_DEFAULT_SUFFIX = "-0-0-0"
    COMPOSITE_POLICY = "coerce"  # or "raise"

    # Third-down conversion proxy
    CONVERSION_DOWN = 3
    MIN_EXPECTED_POINTS_AFTER = 0.0

    # Columns that must be fully populated before modelling
    MODELING_COLUMNS = ["Pts", "Pts.1", "SackedYards", "RushYards", "CmpAttYdTDINT"]
    SACKED_PAD_LEVELS = ["0", "1"]

    # Model formulas
    OLS_TARGET = "Pts"
    LOGIT_TARGET = "Win"
    PREDICTOR_TERMS = ["RushYards", "C(SackedYards)"]
    KNN_FEATURES = ["RushYards", "ThirdDownConversions", "SackedCount"]

    # KNN search
    RANDOM_STATE = 42
    TEST_SIZE = 0.25
    CV_FOLDS = 5
    KNN_MAX_NEIGHBORS = 15

    # Visualization settings
    FIGURE_SIZE = (12, 8)
    DPI = 150

    @classmethod
    def ensure_directories(cls):
        """Create all required directories if they don't exist."""
        for dir_path in [cls.RAW_DATA_DIR, cls.PROCESSED_DATA_DIR, cls.OUTPUT_DIR]:
            dir_path.mkdir(parents=True, exist_ok=True)


# Create global config instance
config = Config()

# ───────────────────────── Team lookup table ─────────────────────────
# code -> (full name, location code). Location codes follow the play-by-play
# field-position prefixes (e.g. "KAN 25").
TEAM_TABLE: Dict[str, Tuple[str, str]] = {
    "ARI": ("Arizona Cardinals", "ARI"),
    "ATL": ("Atlanta Falcons", "ATL"),
    "BAL": ("Baltimore Ravens", "BAL"),
    "BUF": ("Buffalo Bills", "BUF"),
    "CAR": ("Carolina Panthers", "CAR"),
    "CHI": ("Chicago Bears", "CHI"),
    "CIN": ("Cincinnati Bengals", "CIN"),
    "CLE": ("Cleveland Browns", "CLE"),
    "DAL": ("Dallas Cowboys", "DAL"),
    "DEN": ("Denver Broncos", "DEN"),
    "DET": ("Detroit Lions", "DET"),
    "GNB": ("Green Bay Packers", "GNB"),
    "HOU": ("Houston Texans", "HOU"),
    "IND": ("Indianapolis Colts", "IND"),
    "JAX": ("Jacksonville Jaguars", "JAX"),
    "KAN": ("Kansas City Chiefs", "KAN"),
    "LAC": ("Los Angeles Chargers", "LAC"),
    "LAR": ("Los Angeles Rams", "LAR"),
    "LVR": ("Las Vegas Raiders", "LVR"),
    "MIA": ("Miami Dolphins", "MIA"),
    "MIN": ("Minnesota Vikings", "MIN"),
    "NWE": ("New England Patriots", "NWE"),
    "NOR": ("New Orleans Saints", "NOR"),
    "NYG": ("New York Giants", "NYG"),
    "NYJ": ("New York Jets", "NYJ"),
    "PHI": ("Philadelphia Eagles", "PHI"),
    "PIT": ("Pittsburgh Steelers", "PIT"),
    "SFO": ("San Francisco 49ers", "SFO"),
    "SEA": ("Seattle Seahawks", "SEA"),
    "TAM": ("Tampa Bay Buccaneers", "TAM"),
    "TEN": ("Tennessee Titans", "TEN"),
    "WAS": ("Washington Commanders", "WAS"),
}

# Alternate codes and former franchise names (upper-cased) -> TEAM_TABLE key
TEAM_ALIASES: Dict[str, str] = {
    "KC": "KAN",
    "SF": "SFO",
    "GB": "GNB",
    "NE": "NWE",
    "NO": "NOR",
    "TB": "TAM",
    "LV": "LVR",
    "OAK": "LVR",
    "LA": "LAR",
    "STL": "LAR",
    "SD": "LAC",
    "SDG": "LAC",
    "JAC": "JAX",
    "WSH": "WAS",
    # Historical franchise names still used in the Super Bowl results
    "OAKLAND RAIDERS": "LVR",
    "LOS ANGELES RAIDERS": "LVR",
    "WASHINGTON REDSKINS": "WAS",
    "WASHINGTON FOOTBALL TEAM": "WAS",
    "REDSKINS": "WAS",
    "BALTIMORE COLTS": "IND",
    "ST. LOUIS RAMS": "LAR",
    "SAN DIEGO CHARGERS": "LAC",
    "HOUSTON OILERS": "TEN",
    "TENNESSEE OILERS": "TEN",
    "OILERS": "TEN",
    "BOSTON PATRIOTS": "NWE",
    "ST. LOUIS CARDINALS": "ARI",
    "PHOENIX CARDINALS": "ARI",
}

# Attach lookup tables onto the config instance for ease of use
config.TEAM_TABLE = TEAM_TABLE
config.TEAM_ALIASES = TEAM_ALIASES


if __name__ == "__main__":
    print("Super Bowl Analysis Configuration")
    print("=" * 40)
    print(f"Data directory: {config.DATA_DIR}")
    print(f"Plays file: {config.PLAYS_FILE}")
    print(f"Teams in lookup: {len(config.TEAM_TABLE)}")

    config.ensure_directories()
    print("******* Configuration loaded and directories created!")
