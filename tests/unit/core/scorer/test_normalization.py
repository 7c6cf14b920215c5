#!/usr/bin/env python3
"""
Unit tests for keyword/education normalization, byte-bounded truncation
and suggestion building.
"""

import unittest

from core.scorer.constants import MAX_KEYWORDS, SCORE_WEIGHTS
from core.scorer.models import ScoreBreakdown
from core.scorer.normalization import (
    SUGGESTION_BONUS,
    SUGGESTION_COMPLETENESS,
    SUGGESTION_EDUCATION,
    SUGGESTION_EXPERIENCE,
    SUGGESTION_MISSING_KEYWORDS,
    SUGGESTION_SKILLS,
    build_keyword_set,
    build_suggestions,
    diff_sets,
    intersect_sets,
    normalize_education_level,
    normalize_keyword,
    safe_truncate,
)


class TestNormalizeKeyword(unittest.TestCase):

    def test_lowercases_and_trims(self):
        self.assertEqual(normalize_keyword("  Python  "), "python")

    def test_collapses_whitespace(self):
        self.assertEqual(normalize_keyword("Machine \t  Learning\n"), "machine learning")

    def test_blank(self):
        self.assertEqual(normalize_keyword("   "), "")


class TestBuildKeywordSet(unittest.TestCase):

    def test_dedupes_and_skips_blank(self):
        keywords = build_keyword_set(["Python", "python ", "  ", "Go"])
        self.assertEqual(list(keywords), ["python", "go"])

    def test_respects_limit(self):
        keywords = build_keyword_set(["a", "b", "c"], limit=2)
        self.assertEqual(list(keywords), ["a", "b"])

    def test_limit_never_exceeds_cap(self):
        keywords = build_keyword_set([f"k{i}" for i in range(500)], limit=500)
        self.assertEqual(len(keywords), MAX_KEYWORDS)
        self.assertNotIn(f"k{MAX_KEYWORDS}", keywords)

    def test_non_positive_limit(self):
        self.assertEqual(build_keyword_set(["a"], limit=0), {})
        self.assertEqual(build_keyword_set(["a"], limit=-5), {})


class TestSetOperations(unittest.TestCase):

    def test_intersection_follows_smaller_collection(self):
        small = {"c": None, "a": None}
        large = {"a": None, "b": None, "c": None}
        self.assertEqual(intersect_sets(small, large), ["c", "a"])
        self.assertEqual(intersect_sets(large, small), ["c", "a"])

    def test_difference_keeps_order(self):
        self.assertEqual(diff_sets(["x", "a", "y"], {"a": None}), ["x", "y"])

    def test_empty(self):
        self.assertEqual(intersect_sets({}, {"a": None}), [])
        self.assertEqual(diff_sets([], {"a": None}), [])


class TestSafeTruncate(unittest.TestCase):

    def test_short_string_unchanged(self):
        self.assertEqual(safe_truncate("abc", 12), "abc")

    def test_fits_exactly(self):
        self.assertEqual(safe_truncate("héllo", 6), "héllo")

    def test_drops_partial_two_byte_char(self):
        self.assertEqual(safe_truncate("héllo", 2), "h")
        self.assertEqual(safe_truncate("héllo", 3), "hé")

    def test_drops_partial_three_byte_char(self):
        self.assertEqual(safe_truncate("€€", 5), "€")

    def test_drops_partial_four_byte_char(self):
        self.assertEqual(safe_truncate("\U0001F600a", 3), "")
        self.assertEqual(safe_truncate("\U0001F600a", 4), "\U0001F600")

    def test_result_fits_budget(self):
        value = "ü" * 1000
        truncated = safe_truncate(value, 101)
        self.assertLessEqual(len(truncated.encode("utf-8")), 101)
        self.assertEqual(truncated, "ü" * 50)

    def test_long_ascii_cut_at_budget(self):
        self.assertEqual(safe_truncate("abcdef", 3), "abc")
        self.assertEqual(safe_truncate("a" * 100_000, 10), "a" * 10)

    def test_long_multibyte_cut_at_budget(self):
        self.assertEqual(safe_truncate("é" * 10, 5), "éé")

    def test_non_positive_budget(self):
        self.assertEqual(safe_truncate("abc", 0), "")
        self.assertEqual(safe_truncate("abc", -1), "")


class TestNormalizeEducationLevel(unittest.TestCase):

    def test_exact_keys(self):
        for level in ("none", "associate", "bachelor", "master", "phd"):
            self.assertEqual(normalize_education_level(level), level)
        self.assertEqual(normalize_education_level("  PhD "), "phd")

    def test_synonyms(self):
        self.assertEqual(normalize_education_level("Associate Degree"), "associate")
        self.assertEqual(normalize_education_level("BSc Physics"), "bachelor")
        self.assertEqual(normalize_education_level("B.Tech"), "bachelor")
        self.assertEqual(normalize_education_level("MSc"), "master")
        self.assertEqual(normalize_education_level("M.Tech"), "master")
        self.assertEqual(normalize_education_level("Doctor of Philosophy"), "phd")

    def test_unknown_falls_back_to_none(self):
        self.assertEqual(normalize_education_level("high school"), "none")
        self.assertEqual(normalize_education_level(""), "none")
        self.assertEqual(normalize_education_level(None), "none")
        self.assertEqual(normalize_education_level(3), "none")


class TestBuildSuggestions(unittest.TestCase):

    def setUp(self):
        self.weights = dict(SCORE_WEIGHTS)

    def test_perfect_breakdown(self):
        breakdown = ScoreBreakdown(100, 100, 100, 100, 100)
        self.assertEqual(build_suggestions(breakdown, [], self.weights), [])

    def test_fixed_order(self):
        breakdown = ScoreBreakdown(0, 0, 0, 0, 0)
        suggestions = build_suggestions(breakdown, ["go"], self.weights)
        self.assertEqual(suggestions, [
            SUGGESTION_SKILLS,
            SUGGESTION_MISSING_KEYWORDS.format(keywords="go"),
            SUGGESTION_EXPERIENCE,
            SUGGESTION_EDUCATION,
            SUGGESTION_COMPLETENESS,
            SUGGESTION_BONUS,
        ])

    def test_thresholds(self):
        breakdown = ScoreBreakdown(80, 80, 80, 99, 99)
        self.assertEqual(
            build_suggestions(breakdown, [], self.weights),
            [SUGGESTION_COMPLETENESS, SUGGESTION_BONUS]
        )

    def test_missing_keywords_capped_at_five(self):
        breakdown = ScoreBreakdown(100, 100, 100, 100, 100)
        suggestions = build_suggestions(breakdown, ["a", "b", "c", "d", "e", "f"], self.weights)
        self.assertEqual(suggestions, [SUGGESTION_MISSING_KEYWORDS.format(keywords="a, b, c, d, e")])

    def test_zero_weight_components_skipped(self):
        weights = {"skill": 0, "experience": 0, "education": 0, "completeness": 0, "bonus": 0}
        breakdown = ScoreBreakdown(0, 0, 0, 0, 0)
        # Missing keywords are reported regardless of weights
        self.assertEqual(
            build_suggestions(breakdown, ["go"], weights),
            [SUGGESTION_MISSING_KEYWORDS.format(keywords="go")]
        )


if __name__ == "__main__":
    unittest.main()
