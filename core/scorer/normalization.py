#!/usr/bin/env python3
"""
Normalization Utilities - Bounded, comparable forms of untrusted strings.

Keyword normalization, capped keyword sets, byte-bounded truncation,
education-level synonym resolution and suggestion text. Nothing here does
I/O, and no function allocates memory proportional to attacker-controlled
array lengths.
"""

from typing import Collection, Dict, Iterable, List, Mapping, Sequence

from core.scorer.constants import EDUCATION_LEVELS, MAX_KEYWORDS, MAX_PAYLOAD_BYTES
from core.scorer.models import ScoreBreakdown

# Insertion-ordered set: dict keys keep first-seen order, so results are
# reproducible across interpreter runs regardless of hash seed.
KeywordSet = Dict[str, None]

# UTF-8 never needs more than 4 bytes per code point
_MAX_UTF8_BYTES_PER_CHAR = 4

_EDUCATION_SYNONYMS = (
    ("associate", ("associate",)),
    ("bachelor", ("bachelor", "bsc", "b.tech", "be")),
    ("master", ("master", "msc", "m.tech", "ma")),
    ("phd", ("phd", "doctor")),
)

SUGGESTION_SKILLS = (
    "Highlight more of the required skills in your resume, ensuring terminology "
    "matches the job description."
)
SUGGESTION_MISSING_KEYWORDS = (
    "Consider adding experience or keywords related to: {keywords}. "
    "Only include items that genuinely reflect your background."
)
SUGGESTION_EXPERIENCE = (
    "Emphasize roles and achievements that demonstrate years of experience "
    "relevant to this position."
)
SUGGESTION_EDUCATION = (
    "Clarify your highest education level and ensure your degree information "
    "is clearly listed in the education section."
)
SUGGESTION_COMPLETENESS = (
    "Complete all core sections of your resume, including skills, experience, "
    "education, and a concise professional summary."
)
SUGGESTION_BONUS = (
    "Add relevant certifications, projects, publications, or awards to unlock "
    "additional bonus score and stand out."
)

MAX_SUGGESTED_KEYWORDS = 5


def normalize_keyword(raw: str) -> str:
    """Trim, lowercase and collapse internal whitespace runs to single spaces."""
    return " ".join(raw.lower().split())


def build_keyword_set(keywords: Sequence[str], limit: int = MAX_KEYWORDS) -> KeywordSet:
    """
    Normalize the leading keywords and collect the unique non-empty ones.

    Only the first min(limit, MAX_KEYWORDS) entries are looked at; anything
    beyond the cap is ignored, which bounds matching cost regardless of how
    long the caller's array is.

    Args:
        keywords: Raw keyword strings
        limit: Per-call cap (never above MAX_KEYWORDS)

    Returns:
        Insertion-ordered set of normalized keywords
    """
    effective_limit = max(0, min(limit, MAX_KEYWORDS))
    result: KeywordSet = {}

    for raw in keywords[:effective_limit]:
        normalized = normalize_keyword(raw)
        if normalized:
            result[normalized] = None

    return result


def intersect_sets(a: Collection[str], b: Collection[str]) -> List[str]:
    """Intersection in O(min(|a|, |b|)), ordered like the smaller collection."""
    smaller, larger = (a, b) if len(a) <= len(b) else (b, a)
    return [value for value in smaller if value in larger]


def diff_sets(a: Iterable[str], b: Collection[str]) -> List[str]:
    """Elements of a that are not in b, in a's order."""
    return [value for value in a if value not in b]


def safe_truncate(value: str, max_bytes: int = MAX_PAYLOAD_BYTES) -> str:
    """
    Truncate a string so its UTF-8 encoding fits within max_bytes.

    The cut never lands inside a multi-byte character: a partial trailing
    sequence is dropped rather than kept.
    """
    if max_bytes <= 0:
        return ""

    # Cheap path: even at 4 bytes per char the string fits.
    if len(value) * _MAX_UTF8_BYTES_PER_CHAR <= max_bytes:
        return value

    # Every char is at least one byte, so the first max_bytes chars cover the budget
    encoded = value[:max_bytes].encode("utf-8", "surrogatepass")
    if len(encoded) <= max_bytes:
        return value[:max_bytes]

    return encoded[:max_bytes].decode("utf-8", "ignore")


def normalize_education_level(raw: object) -> str:
    """
    Map a free-text education level onto an EDUCATION_LEVELS key.

    Exact keys win; otherwise the first matching synonym group is used.
    Unknown or non-string input falls back to 'none'.
    """
    if not isinstance(raw, str):
        return "none"

    value = raw.strip().lower()
    if value in EDUCATION_LEVELS:
        return value

    for level, synonyms in _EDUCATION_SYNONYMS:
        if any(synonym in value for synonym in synonyms):
            return level

    return "none"


def _weight_enabled(weights: Mapping[str, float], component: str) -> bool:
    weight = weights.get(component)
    return weight is not None and weight > 0


def build_suggestions(
    breakdown: ScoreBreakdown,
    missing_keywords: Sequence[str],
    weights: Mapping[str, float]
) -> List[str]:
    """
    Build improvement hints from score gaps and missing keywords.

    Deterministic for a given breakdown, missing list and weight mapping.
    Order is fixed: skills, missing keywords, experience, education,
    completeness, bonus. A component with zero weight never gets a hint.
    """
    suggestions: List[str] = []

    if breakdown.skill_score < 80 and _weight_enabled(weights, "skill"):
        suggestions.append(SUGGESTION_SKILLS)

    if missing_keywords:
        sample = ", ".join(missing_keywords[:MAX_SUGGESTED_KEYWORDS])
        suggestions.append(SUGGESTION_MISSING_KEYWORDS.format(keywords=sample))

    if breakdown.experience_score < 80 and _weight_enabled(weights, "experience"):
        suggestions.append(SUGGESTION_EXPERIENCE)

    if breakdown.education_score < 80 and _weight_enabled(weights, "education"):
        suggestions.append(SUGGESTION_EDUCATION)

    if breakdown.completeness_score < 100 and _weight_enabled(weights, "completeness"):
        suggestions.append(SUGGESTION_COMPLETENESS)

    if breakdown.bonus_score < 100 and _weight_enabled(weights, "bonus"):
        suggestions.append(SUGGESTION_BONUS)

    return suggestions
