"""
Unit tests for the offense composite parser.
"""
import unittest
import sys
import os

import numpy as np
import pandas as pd

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from src.super_bowl_analysis.data.composite import (
    MISSING,
    CompositeParseError,
    OffenseComposite,
    normalize_composite,
    parse_composite,
    split_composite_column,
)


class TestNormalizeComposite(unittest.TestCase):
    """Shape heuristics applied before splitting."""

    def test_regular_string_unchanged(self):
        self.assertEqual(normalize_composite("10-150-1-0"), "10-150-1-0")

    def test_bare_number_gets_default_suffix(self):
        self.assertEqual(normalize_composite("12"), "12-0-0-0")

    def test_leading_minus_gets_zero_prefix(self):
        self.assertEqual(normalize_composite("-5-20-2-1"), "0-5-20-2-1")

    def test_missing_values(self):
        for raw in (None, np.nan, "", "   "):
            self.assertIsNone(normalize_composite(raw))

    def test_idempotent(self):
        for raw in ("12", "-5-20-2-1", "10-150-1-0"):
            once = normalize_composite(raw)
            self.assertEqual(normalize_composite(once), once)


class TestParseComposite(unittest.TestCase):
    """Splitting into the four sub-fields."""

    def test_four_way_split(self):
        parsed = parse_composite("10-150-1-0")
        self.assertEqual(parsed, OffenseComposite("10", "150", "1", "0"))

    def test_bare_number(self):
        parsed = parse_composite("12")
        self.assertEqual(parsed.first_downs, "12")
        self.assertEqual(
            (parsed.rush_yds_tds, parsed.cmp_att_yd_td_int, parsed.sacked_yards),
            ("0", "0", "0"),
        )

    def test_leading_minus_truncates_into_last_field(self):
        parsed = parse_composite("-5-20-2-1")
        self.assertEqual(parsed, OffenseComposite("0", "5", "20", "2-1"))

    def test_rejoin_reproduces_normalized_string(self):
        for raw in ("10-150-1-0", "-5-20-2-1", "24-35-271-2-1", "12"):
            self.assertEqual(parse_composite(raw).join(), normalize_composite(raw))

    def test_too_few_parts_keeps_leading_fields(self):
        with self.assertLogs("src.super_bowl_analysis.data.composite", level="WARNING"):
            parsed = parse_composite("29-129-1")
        self.assertEqual(parsed, OffenseComposite("29", "129", "1", None))
        self.assertFalse(parsed.is_missing)
        self.assertFalse(parsed.is_complete)
        self.assertIsNone(parsed.join())

    def test_two_parts_pads_two_missing_fields(self):
        with self.assertLogs("src.super_bowl_analysis.data.composite", level="WARNING"):
            parsed = parse_composite("4-11")
        self.assertEqual(parsed, OffenseComposite("4", "11", None, None))

    def test_empty_subfield_is_left_missing(self):
        with self.assertLogs("src.super_bowl_analysis.data.composite", level="WARNING"):
            parsed = parse_composite("10--1-0")
        self.assertEqual(parsed, OffenseComposite("10", None, "1", "0"))

    def test_too_few_parts_raises_in_strict_mode(self):
        with self.assertRaises(CompositeParseError):
            parse_composite("29-107-1", policy="raise")

    def test_empty_subfield_is_malformed(self):
        with self.assertRaises(CompositeParseError):
            parse_composite("10--1-0", policy="raise")

    def test_missing_value_is_malformed(self):
        self.assertIs(parse_composite(np.nan), MISSING)
        with self.assertRaises(CompositeParseError):
            parse_composite(None, policy="raise")

    def test_unknown_policy(self):
        with self.assertRaises(ValueError):
            parse_composite("10-150-1-0", policy="ignore")

    def test_parse_error_is_value_error(self):
        self.assertTrue(issubclass(CompositeParseError, ValueError))


class TestSplitCompositeColumn(unittest.TestCase):

    def test_column_split_keeps_index(self):
        stats = pd.Series(["10-150-1-0", "12", None, "29-129-1"], index=[5, 7, 9, 11])
        parts = split_composite_column(stats)

        self.assertListEqual(list(parts.columns),
                             ["FirstDowns", "RushYdsTDs", "CmpAttYdTDINT", "SackedYards"])
        self.assertListEqual(list(parts.index), [5, 7, 9, 11])
        self.assertEqual(parts.loc[7, "FirstDowns"], "12")
        self.assertTrue(parts.loc[9].isna().all())
        self.assertEqual(parts.loc[11, "RushYdsTDs"], "129")
        self.assertTrue(pd.isna(parts.loc[11, "SackedYards"]))


if __name__ == '__main__':
    unittest.main()
