"""
Parser for the packed offense strings found in the wide offense table.

Each team cell looks like ``firstdowns-rush-passing-sacked``:

    "10-150-1-0"   -> FirstDowns="10", RushYdsTDs="150", CmpAttYdTDINT="1", SackedYards="0"
    "12"           -> normalised to "12-0-0-0"
    "-5-20-2-1"    -> normalised to "0-5-20-2-1" -> ("0", "5", "20", "2-1")

At most three splits are made, so any surplus delimiters stay inside the
last field and rejoining the four parts always gives back the normalised
string. Strings with fewer than four parts are malformed: the parts that
are present are kept and the trailing sub-fields are left missing.
"""
from __future__ import annotations

import logging
from dataclasses import astuple, dataclass
from typing import List, Optional

import pandas as pd

from src.super_bowl_analysis.config import config

logger = logging.getLogger(__name__)

_POLICIES = ("coerce", "raise")


class CompositeParseError(ValueError):
    """Raised for a malformed composite when the policy is ``"raise"``."""


@dataclass(frozen=True)
class OffenseComposite:
    """The four sub-fields of one composite offense string."""
    first_downs: Optional[str] = None
    rush_yds_tds: Optional[str] = None
    cmp_att_yd_td_int: Optional[str] = None
    sacked_yards: Optional[str] = None

    @property
    def is_missing(self) -> bool:
        return all(part is None for part in astuple(self))

    @property
    def is_complete(self) -> bool:
        return all(part is not None for part in astuple(self))

    def join(self, delimiter: str = config.COMPOSITE_DELIMITER) -> Optional[str]:
        """Rejoin the parts; ``None`` when any sub-field is missing."""
        if not self.is_complete:
            return None
        return delimiter.join(astuple(self))


MISSING = OffenseComposite()


def normalize_composite(
    raw: object,
    delimiter: str = config.COMPOSITE_DELIMITER,
    default_suffix: str = config.COMPOSITE_DEFAULT_SUFFIX,
) -> Optional[str]:
    """
    Apply the two shape heuristics to a raw cell.

    - a leading minus sign gets a ``"0"`` prepended so the first token is never empty
    - a value without any delimiter is a bare FirstDowns count and gets ``default_suffix``

    Returns ``None`` for missing or blank cells.
    """
    if raw is None or (not isinstance(raw, str) and pd.isna(raw)):
        return None
    text = str(raw).strip()
    if not text:
        return None
    if text.startswith(delimiter):
        text = "0" + text
    if delimiter not in text:
        text = text + default_suffix
    return text


def parse_composite(
    raw: object,
    *,
    policy: str = config.COMPOSITE_POLICY,
    delimiter: str = config.COMPOSITE_DELIMITER,
) -> OffenseComposite:
    """
    Parse one composite cell into an :class:`OffenseComposite`.

    Args:
        raw: Cell value from the wide offense table
        policy: ``"coerce"`` keeps whatever sub-fields parsed, leaves the
            rest missing and logs a warning; ``"raise"`` raises CompositeParseError
        delimiter: Field separator

    Returns:
        Parsed composite
    """
    if policy not in _POLICIES:
        raise ValueError(f"Unknown composite policy {policy!r}; expected one of {_POLICIES}")

    text = normalize_composite(raw, delimiter=delimiter)
    if text is None:
        _malformed(raw, "empty value", policy)
        return MISSING

    parts: List[Optional[str]] = [part or None for part in text.split(delimiter, 3)]
    if len(parts) < 4:
        _malformed(raw, f"{len(parts)} part(s), expected 4", policy)
        parts += [None] * (4 - len(parts))
    elif None in parts:
        _malformed(raw, "empty sub-field", policy)
    return OffenseComposite(*parts)


def _malformed(raw: object, reason: str, policy: str) -> None:
    if policy == "raise":
        raise CompositeParseError(f"Malformed offense composite {raw!r}: {reason}")
    logger.warning("Malformed offense composite %r (%s) → missing sub-fields", raw, reason)


def split_composite_column(
    stats: pd.Series,
    *,
    policy: str = config.COMPOSITE_POLICY,
) -> pd.DataFrame:
    """Vectorised helper: one column per sub-field, indexed like ``stats``."""
    parsed = [astuple(parse_composite(value, policy=policy)) for value in stats]
    return pd.DataFrame(parsed, columns=config.COMPOSITE_FIELDS, index=stats.index)
