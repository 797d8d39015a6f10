"""
Cleaning, reshaping and merging for the Super Bowl analysis.

Every step takes a DataFrame, works on a copy and returns a new frame, so
each stage can be run and tested on its own:

    normalize_play_types  → typed play-by-play with LocationCode
    reshape_offense       → one row per (team, category) with parsed sub-fields
    third_down_conversions→ per-location count of successful third downs
    merge_tables          → offense ⋈ Super Bowls ⋈ third downs, plus Win
    impute_missing        → zero-fill and a ≥2-level SackedYards factor
"""
from __future__ import annotations

import logging
from typing import Dict, Optional, Tuple

import pandas as pd

from src.super_bowl_analysis.config import config
from src.super_bowl_analysis.data.composite import normalize_composite, split_composite_column

logger = logging.getLogger(__name__)

_VALID_DOWNS = [1, 2, 3, 4]


# ───────────────────────── team lookup ─────────────────────────
def _build_name_index() -> Dict[str, str]:
    """Full names and nicknames (upper-cased) → TEAM_TABLE code."""
    index: Dict[str, str] = {}
    for code, (name, _) in config.TEAM_TABLE.items():
        index[name.upper()] = code
        index[name.split()[-1].upper()] = code
    return index


_NAME_INDEX = _build_name_index()


def resolve_team(identifier: object) -> Tuple[str, Optional[str]]:
    """
    Map a team code, full name or nickname to ``(full name, location code)``.

    Unknown identifiers keep their label as the name and get no location.
    """
    label = str(identifier).strip()
    key = label.upper()
    key = config.TEAM_ALIASES.get(key, key)
    if key not in config.TEAM_TABLE:
        key = _NAME_INDEX.get(key, key)
    if key in config.TEAM_TABLE:
        return config.TEAM_TABLE[key]
    logger.warning("Unknown team %r - no location code assigned", label)
    return label, None


def team_key(identifier: object) -> Optional[str]:
    """Join key for a team: its location code, or the upper-cased label when unknown."""
    if identifier is None or pd.isna(identifier):
        return None
    name, location = resolve_team(identifier)
    return location if location is not None else name.upper()


def _location_code(value: object) -> Optional[str]:
    """Leading token of a field position such as ``"KAN 25"``."""
    if not isinstance(value, str) or not value.strip():
        return None
    return value.split()[0].upper()


# ───────────────────────── play-by-play ─────────────────────────
def normalize_play_types(plays: pd.DataFrame) -> pd.DataFrame:
    """
    Best-effort casting of the free-text play columns.

    - ``Down``: nullable integer restricted to 1-4
    - ``ToGo``: nullable integer; fractional values become missing
    - ``EPA``: float
    - ``LocationCode``: team prefix of ``Location``

    Values that do not coerce become missing; nothing is raised.
    """
    df = plays.copy()

    down = pd.to_numeric(df["Down"], errors="coerce")
    df["Down"] = down.where(down.isin(_VALID_DOWNS)).astype("Int64")

    to_go = pd.to_numeric(df["ToGo"], errors="coerce")
    df["ToGo"] = to_go.where(to_go.mod(1) == 0).astype("Int64")

    df["EPA"] = pd.to_numeric(df["EPA"], errors="coerce").astype(float)
    df["LocationCode"] = df["Location"].map(_location_code).astype(object)

    lost = int(df["Down"].isna().sum() - pd.isna(plays["Down"]).sum())
    if lost > 0:
        logger.info("Down: %d value(s) failed to coerce and are now missing", lost)
    return df


def third_down_conversions(plays: pd.DataFrame) -> pd.DataFrame:
    """
    Count third-down plays that raised expected points, per location code.

    Returns:
        DataFrame with ``Location`` and ``ThirdDownConversions`` columns
    """
    df = plays if "LocationCode" in plays.columns else normalize_play_types(plays)

    on_third = df["Down"].eq(config.CONVERSION_DOWN).fillna(False).astype(bool)
    gained = df["EPA"].gt(config.MIN_EXPECTED_POINTS_AFTER)
    counts = df.loc[on_third & gained, "LocationCode"].value_counts().sort_index()

    result = pd.DataFrame({
        "Location": counts.index.astype(object),
        "ThirdDownConversions": counts.to_numpy(dtype=int),
    })
    logger.info("Third-down conversions found for %d location(s)", len(result))
    return result


# ───────────────────────── offense table ─────────────────────────
def reshape_offense(
    offense: pd.DataFrame,
    *,
    policy: str = config.COMPOSITE_POLICY,
) -> pd.DataFrame:
    """
    Unpivot the wide offense table and parse each composite string.

    The first column names the offensive category; every other column is a
    team. The result has one row per (team, category).

    Args:
        offense: Wide offense table as loaded
        policy: Malformed-composite policy, ``"coerce"`` or ``"raise"``

    Returns:
        Long offense table with Category, Team, Stats, the four sub-fields,
        RushYards and Location
    """
    category_col = offense.columns[0]
    long = (
        offense.copy()
        .melt(id_vars=[category_col], var_name="Team", value_name="RawStats")
        .rename(columns={category_col: "Category"})
    )

    parts = split_composite_column(long["RawStats"], policy=policy)
    long["Stats"] = long["RawStats"].map(normalize_composite)
    long = pd.concat([long.drop(columns="RawStats"), parts], axis=1)

    resolved = [resolve_team(team) for team in long["Team"]]
    long["Team"] = [name for name, _ in resolved]
    long["Location"] = pd.Series([loc for _, loc in resolved], index=long.index, dtype=object)

    long["RushYards"] = pd.to_numeric(
        long["RushYdsTDs"].astype(str).str.extract(r"^(\d+)", expand=False),
        errors="coerce",
    )

    malformed = int(long[config.COMPOSITE_FIELDS].isna().any(axis=1).sum())
    if malformed:
        logger.warning("%d offense composite(s) have missing sub-fields", malformed)
    logger.info("Reshaped offense → %s rows × %s cols", *long.shape)
    return long


# ───────────────────────── merge & impute ─────────────────────────
def merge_tables(
    offense_long: pd.DataFrame,
    superbowls: pd.DataFrame,
    third_downs: pd.DataFrame,
) -> pd.DataFrame:
    """
    Left-join offense → Super Bowls (Team = Winner) → third downs (Location).

    Both sides of the first join are keyed through the team lookup, so
    codes, current names and former franchise names all line up.

    ``Win`` is 1 when the winner's points exceed the loser's. Because the
    join key is the winner, every matched row has Win = 1.
    """
    offense_keyed = offense_long.assign(TeamKey=[team_key(team) for team in offense_long["Team"]])
    winners_keyed = superbowls.assign(TeamKey=[team_key(winner) for winner in superbowls["Winner"]])

    dupes = int(winners_keyed["TeamKey"].dropna().duplicated().sum())
    if dupes:
        logger.warning("%d repeated winner(s) in the Super Bowl table - offense rows will fan out", dupes)

    merged = offense_keyed.merge(winners_keyed, on="TeamKey", how="left").drop(columns="TeamKey")
    merged = merged.merge(third_downs, on="Location", how="left")

    winner_pts = pd.to_numeric(merged["Pts"], errors="coerce")
    loser_pts = pd.to_numeric(merged["Pts.1"], errors="coerce")
    merged["Win"] = (winner_pts > loser_pts).astype(int)

    unmatched = int(merged["Winner"].isna().sum())
    if unmatched:
        logger.warning("%d offense row(s) matched no Super Bowl winner", unmatched)
    logger.info("Merged shape: %s rows × %s cols", *merged.shape)
    return merged


def impute_missing(merged: pd.DataFrame) -> pd.DataFrame:
    """
    Zero-fill policy: numeric gaps → 0, everything else → ``"0"``.

    ``SackedYards`` becomes a categorical with at least two levels, padding
    from ``config.SACKED_PAD_LEVELS`` when the data only has one.
    """
    df = merged.copy()

    numeric_cols = df.select_dtypes(include="number").columns
    other_cols = df.columns.difference(numeric_cols)
    df[numeric_cols] = df[numeric_cols].fillna(0)
    for col in other_cols:
        df[col] = df[col].astype(object).where(df[col].notna(), "0")

    if "ThirdDownConversions" in df.columns:
        df["ThirdDownConversions"] = df["ThirdDownConversions"].astype(int)

    sacked = df["SackedYards"].astype(str)
    levels = sorted(sacked.unique())
    for pad in config.SACKED_PAD_LEVELS:
        if len(levels) >= 2:
            break
        if pad not in levels:
            logger.info("SackedYards has a single level; padding level %r", pad)
            levels.append(pad)
    df["SackedYards"] = pd.Categorical(sacked, categories=levels)
    return df


def build_analysis_table(
    plays: pd.DataFrame,
    offense: pd.DataFrame,
    superbowls: pd.DataFrame,
    *,
    policy: str = config.COMPOSITE_POLICY,
) -> pd.DataFrame:
    """Run the whole cleaning chain and return the analysis-ready table."""
    typed_plays = normalize_play_types(plays)
    offense_long = reshape_offense(offense, policy=policy)
    third_downs = third_down_conversions(typed_plays)
    merged = merge_tables(offense_long, superbowls, third_downs)
    table = impute_missing(merged)
    print(f"******* Analysis table: {table.shape[0]} rows, {table.shape[1]} columns")
    return table
