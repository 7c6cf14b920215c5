#!/usr/bin/env python3
"""
ATS Engine - Weighted multi-factor resume-to-job scoring.

Five independent component scorers (skills, experience, education,
completeness, bonus) feed a weighted aggregator. score_resume_against_job()
is the only entry point callers should use.

The engine is a pure function of its inputs: no I/O, no shared mutable
state, no caching and no clock reads. Any process can serve any request, so
scaling out is just running more workers. Cost is bounded by the input caps
(MAX_KEYWORDS entries per keyword list, MAX_PAYLOAD_BYTES per string), never
by the length of what the caller sends.

Failure contract:
    Malformed input is detected by the input stage (_prepare_inputs), which
    raises ScoringInputError. The orchestrator turns that into
    ScoringResult.zero(); nothing ever propagates to the caller.
"""

from typing import Any, Dict, List, Mapping, Optional, Sequence
from dataclasses import dataclass, field
import logging
import math
import numbers

from core.scorer.constants import (
    BONUS_ITEMS,
    EDUCATION_LEVELS,
    MAX_KEYWORDS,
    MAX_TOTAL_BONUS,
    REQUIRED_RESUME_SECTIONS,
    SCORE_COMPONENTS,
    SCORE_WEIGHTS,
    SCORING_VERSION,
)
from core.scorer.errors import ScoringInputError
from core.scorer.models import (
    JobInput,
    ResumeInput,
    ScoreBreakdown,
    ScoringContext,
    ScoringMetadata,
    ScoringResult,
    WeightStrategy,
)
from core.scorer.normalization import (
    build_keyword_set,
    build_suggestions,
    diff_sets,
    intersect_sets,
    normalize_education_level,
    normalize_keyword,
    safe_truncate,
)

logger = logging.getLogger(__name__)


@dataclass
class SkillMatch:
    score: int = 0
    matched: List[str] = field(default_factory=list)
    missing: List[str] = field(default_factory=list)


@dataclass
class _PreparedInputs:
    weights: Dict[str, float]
    resume_skills: List[str]
    required_skills: List[str]
    resume_years: float
    required_years: Optional[float]
    resume_level: str
    required_level: str


# ----------------------------
# Helpers
# ----------------------------
def _round_half_up(x: float) -> int:
    # Python's round() is banker's rounding; scores round 0.5 toward +inf.
    return int(math.floor(x + 0.5))


def _is_number(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _to_float(value: numbers.Real, name: str) -> float:
    try:
        return float(value)
    except OverflowError:
        raise ScoringInputError(f"{name} is out of range")


def _get(obj: Any, name: str) -> Any:
    """Read a field from a dataclass/object or a plain mapping payload."""
    if obj is None:
        return None
    if isinstance(obj, Mapping):
        return obj.get(name)
    return getattr(obj, name, None)


def _section_present(value: Any) -> bool:
    if value is None or isinstance(value, (bool, numbers.Number)):
        return False
    if isinstance(value, str):
        return bool(safe_truncate(value).strip())
    # Lists (even empty ones) and nested objects count as present
    return True


def _bonus_present(value: Any) -> bool:
    if isinstance(value, str):
        return bool(safe_truncate(value).strip())
    if isinstance(value, (list, tuple)):
        return len(value) > 0
    return False


# ----------------------------
# Input stage
# ----------------------------
def resolve_weights(overrides: Optional[WeightStrategy] = None) -> Dict[str, float]:
    """
    Resolve effective weights: each component takes its override if given,
    else its default. Overrides are not re-normalized to sum to 1.0.
    """
    if overrides is None:
        return dict(SCORE_WEIGHTS)
    if not isinstance(overrides, Mapping):
        raise ScoringInputError(f"weights must be a mapping, got {type(overrides).__name__}")

    effective: Dict[str, float] = {}
    for component in SCORE_COMPONENTS:
        value = overrides.get(component)
        if value is None:
            effective[component] = SCORE_WEIGHTS[component]
        elif _is_number(value):
            effective[component] = _to_float(value, f"weight for {component!r}")
        else:
            raise ScoringInputError(f"weight for {component!r} must be numeric, got {value!r}")
    return effective


def _prepare_keywords(value: Any, name: str) -> List[str]:
    """Cap, byte-truncate and normalize a raw keyword list."""
    if value is None:
        return []
    if not isinstance(value, (list, tuple)):
        raise ScoringInputError(f"{name} must be a list of strings, got {type(value).__name__}")

    prepared = []
    for raw in value[:MAX_KEYWORDS]:
        if not isinstance(raw, str):
            raise ScoringInputError(f"{name} entries must be strings, got {type(raw).__name__}")
        prepared.append(normalize_keyword(safe_truncate(raw)))
    return prepared


def _prepare_inputs(resume: Any, job: Any, context: Any) -> _PreparedInputs:
    if resume is None:
        raise ScoringInputError("resume is missing")
    if job is None:
        raise ScoringInputError("job is missing")

    # Absent or non-numeric requirement scores experience 0, like a missed tier
    required_years = _get(job, "required_experience_years")
    if _is_number(required_years):
        required_years = _to_float(required_years, "job.required_experience_years")
    else:
        required_years = None

    required_level = _get(job, "required_education_level")
    if not isinstance(required_level, str):
        raise ScoringInputError(f"job.required_education_level must be a string, got {required_level!r}")

    resume_level = _get(_get(resume, "education"), "level")
    if resume_level is None:
        resume_level = "none"
    elif not isinstance(resume_level, str):
        raise ScoringInputError(f"resume.education.level must be a string, got {resume_level!r}")

    # Non-numeric years degrade to 0
    resume_years = _get(_get(resume, "experience"), "years")
    if not _is_number(resume_years):
        resume_years = 0.0

    return _PreparedInputs(
        weights=resolve_weights(_get(context, "weights")),
        resume_skills=_prepare_keywords(_get(resume, "skills"), "resume.skills"),
        required_skills=_prepare_keywords(_get(job, "required_skills"), "job.required_skills"),
        resume_years=_to_float(resume_years, "resume.experience.years"),
        required_years=required_years,
        resume_level=safe_truncate(resume_level),
        required_level=safe_truncate(required_level),
    )


# ----------------------------
# Component scorers
# ----------------------------
def score_skills(resume_skills: Sequence[str], required_skills: Sequence[str], weight: float) -> SkillMatch:
    """
    Score skill overlap as the matched fraction of required skills.

    An empty requirement list scores 0, not 100: no requirements means no
    match evidence. This differs from score_experience's policy and is kept
    as-is.

    Args:
        resume_skills: Candidate skills
        required_skills: Job's required skills
        weight: Component weight (unused by the formula)

    Returns:
        SkillMatch with score, matched and missing normalized keywords
    """
    if not required_skills:
        return SkillMatch()

    resume_set = build_keyword_set(resume_skills, MAX_KEYWORDS)
    required_set = build_keyword_set(required_skills, MAX_KEYWORDS)

    matched = intersect_sets(resume_set, required_set)
    missing = diff_sets(required_set, resume_set)

    total_required = len(required_set) or 1
    score = _round_half_up(len(matched) / total_required * 100)

    return SkillMatch(score=score, matched=matched, missing=missing)


def score_experience(resume_years: float, required_years: Optional[float], weight: float) -> int:
    """
    Tiered experience score; the first satisfied tier wins.

    - unknown requirement (None)     -> 0
    - no requirement (<= 0)          -> 100
    - years >= required              -> 100
    - years >= 75% of required       -> 80
    - years >= required - 1          -> 60
    - otherwise                      -> 0
    """
    if not _is_number(required_years):
        return 0
    if required_years <= 0:
        return 100

    if not _is_number(resume_years) or not math.isfinite(resume_years) or resume_years < 0:
        resume_years = 0.0

    if resume_years >= required_years:
        return 100
    if resume_years >= required_years * 0.75:
        return 80
    if resume_years >= required_years - 1:
        return 60
    return 0


def score_education(resume_level: str, required_level: str, weight: float) -> int:
    """Binary: 100 if the candidate's level meets the requirement, else 0."""
    resume_ordinal = EDUCATION_LEVELS[normalize_education_level(resume_level)]
    required_ordinal = EDUCATION_LEVELS[normalize_education_level(required_level)]
    return 100 if resume_ordinal >= required_ordinal else 0


def score_completeness(resume: Any, weight: float) -> int:
    """Share of the four core sections that are present, as 0-100."""
    if resume is None:
        return 0

    present = sum(1 for section in REQUIRED_RESUME_SECTIONS if _section_present(_get(resume, section)))
    return _round_half_up(present / len(REQUIRED_RESUME_SECTIONS) * 100)


def score_bonus(resume: Any, weight: float) -> int:
    """
    Bonus sections each add an equal share of MAX_TOTAL_BONUS; the total is
    capped and rescaled to 0-100.
    """
    if resume is None:
        return 0

    share = MAX_TOTAL_BONUS / len(BONUS_ITEMS)
    bonus_fraction = 0.0
    for item in BONUS_ITEMS:
        if _bonus_present(_get(resume, item)):
            bonus_fraction += share

    bonus_fraction = min(bonus_fraction, MAX_TOTAL_BONUS)
    return _round_half_up(bonus_fraction / MAX_TOTAL_BONUS * 100)


def compute_final_score(weighted_components: Sequence[float]) -> int:
    """Sum weighted components (non-finite -> 0), round half up, clamp to [0, 100]."""
    total = 0.0
    for value in weighted_components:
        if _is_number(value) and math.isfinite(value):
            total += value
    return max(0, min(100, _round_half_up(total)))


# ----------------------------
# Main
# ----------------------------
def _score(prepared: _PreparedInputs, resume: Any) -> ScoringResult:
    weights = prepared.weights

    skill_match = score_skills(prepared.resume_skills, prepared.required_skills, weights["skill"])

    breakdown = ScoreBreakdown(
        skill_score=skill_match.score,
        experience_score=score_experience(prepared.resume_years, prepared.required_years, weights["experience"]),
        education_score=score_education(prepared.resume_level, prepared.required_level, weights["education"]),
        completeness_score=score_completeness(resume, weights["completeness"]),
        bonus_score=score_bonus(resume, weights["bonus"]),
    )

    final_score = compute_final_score([
        breakdown.skill_score * weights["skill"],
        breakdown.experience_score * weights["experience"],
        breakdown.education_score * weights["education"],
        breakdown.completeness_score * weights["completeness"],
        breakdown.bonus_score * weights["bonus"],
    ])

    return ScoringResult(
        score=final_score,
        breakdown=breakdown,
        matched_keywords=skill_match.matched,
        missing_keywords=skill_match.missing,
        suggestions=build_suggestions(breakdown, skill_match.missing, weights),
        metadata=ScoringMetadata(processing_time_ms=0, version=SCORING_VERSION, cache_hit=False),
    )


def score_resume_against_job(
    resume: ResumeInput,
    job: JobInput,
    context: ScoringContext
) -> ScoringResult:
    """
    Score a parsed resume against a job description.

    Accepts the dataclass contracts or equivalent snake_case mappings.
    Absent optional resume fields degrade to the weakest value. Malformed
    input yields ScoringResult.zero().

    metadata.processing_time_ms and metadata.cache_hit are fixed
    placeholders (0 / False) for the service layer to overwrite.

    Args:
        resume: Parsed resume input
        job: Parsed job description input
        context: Tenant/job/resume identifiers and optional weight overrides

    Returns:
        Complete ScoringResult; never raises
    """
    try:
        prepared = _prepare_inputs(resume, job, context)
    except ScoringInputError as e:
        logger.warning("Malformed scoring input (%s); returning zero result", e)
        return ScoringResult.zero()

    try:
        result = _score(prepared, resume)
    except Exception:
        logger.exception("Unexpected error while scoring; returning zero result")
        return ScoringResult.zero()

    logger.debug(
        "ATS score %d (skill=%d, exp=%d, edu=%d, complete=%d, bonus=%d)",
        result.score,
        result.breakdown.skill_score,
        result.breakdown.experience_score,
        result.breakdown.education_score,
        result.breakdown.completeness_score,
        result.breakdown.bonus_score,
    )
    return result
