#!/usr/bin/env python3
"""
Scoring Models - Input and result contracts for the ATS engine.

ResumeInput and JobInput are produced by the parsing pipeline and the job
catalog; ScoringResult is handed to the API layer. All of them are transient
value objects built for one scoring call.
"""

from typing import List, Dict, Any, Optional, Mapping
from dataclasses import dataclass, field, asdict

from core.scorer.constants import SCORING_VERSION

# Partial mapping of component name -> fractional weight
WeightStrategy = Dict[str, float]


def _pick(data: Mapping[str, Any], *keys: str) -> Any:
    """Return the first key present in data (camelCase or snake_case payloads)."""
    for key in keys:
        if key in data:
            return data[key]
    return None


@dataclass
class ExperienceInput:
    years: Optional[float] = None


@dataclass
class EducationInput:
    level: Optional[str] = None


@dataclass
class ResumeInput:
    """Candidate-side facts used for scoring."""
    skills: Optional[List[str]] = None
    experience: Optional[ExperienceInput] = None
    education: Optional[EducationInput] = None
    summary: Optional[str] = None

    # Bonus sections
    certifications: Optional[List[str]] = None
    projects: Optional[List[str]] = None
    publications: Optional[List[str]] = None
    awards: Optional[List[str]] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ResumeInput":
        """
        Build a ResumeInput from a parsed-resume payload.

        Nested experience/education objects are converted when they are
        mappings; anything else is passed through untouched so the engine's
        input stage can decide whether it is usable.
        """
        experience = data.get("experience")
        if isinstance(experience, Mapping):
            experience = ExperienceInput(years=experience.get("years"))

        education = data.get("education")
        if isinstance(education, Mapping):
            education = EducationInput(level=education.get("level"))

        return cls(
            skills=data.get("skills"),
            experience=experience,
            education=education,
            summary=data.get("summary"),
            certifications=data.get("certifications"),
            projects=data.get("projects"),
            publications=data.get("publications"),
            awards=data.get("awards"),
        )


@dataclass
class JobInput:
    """
    Requisition-side facts.

    preferred_skills, title and description are carried for the caller but
    are not consulted by any scorer.
    """
    required_experience_years: Optional[float] = None
    required_education_level: Optional[str] = None
    required_skills: Optional[List[str]] = None
    preferred_skills: Optional[List[str]] = None
    title: Optional[str] = None
    description: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "JobInput":
        return cls(
            required_experience_years=_pick(data, "required_experience_years", "requiredExperienceYears"),
            required_education_level=_pick(data, "required_education_level", "requiredEducationLevel"),
            required_skills=_pick(data, "required_skills", "requiredSkills"),
            preferred_skills=_pick(data, "preferred_skills", "preferredSkills"),
            title=data.get("title"),
            description=data.get("description"),
        )


@dataclass
class ScoringContext:
    """Call metadata; identifiers are only used for cache keys and tracing."""
    tenant_id: str
    job_id: str
    resume_id: str
    weights: Optional[WeightStrategy] = None


@dataclass
class ScoreBreakdown:
    """Five independent sub-scores, each an integer in [0, 100]."""
    skill_score: int = 0
    experience_score: int = 0
    education_score: int = 0
    completeness_score: int = 0
    bonus_score: int = 0


@dataclass
class ScoringMetadata:
    # processing_time_ms and cache_hit are filled in by the service layer
    processing_time_ms: float = 0
    version: str = SCORING_VERSION
    cache_hit: bool = False


@dataclass
class ScoringResult:
    """Complete scoring result returned to API consumers."""
    score: int
    breakdown: ScoreBreakdown
    matched_keywords: List[str] = field(default_factory=list)
    missing_keywords: List[str] = field(default_factory=list)
    suggestions: List[str] = field(default_factory=list)
    metadata: ScoringMetadata = field(default_factory=ScoringMetadata)

    @classmethod
    def zero(cls) -> "ScoringResult":
        """The well-formed result returned when no meaningful score can be produced."""
        return cls(score=0, breakdown=ScoreBreakdown())

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ScoringResult":
        return cls(
            score=data["score"],
            breakdown=ScoreBreakdown(**data["breakdown"]),
            matched_keywords=list(data.get("matched_keywords", [])),
            missing_keywords=list(data.get("missing_keywords", [])),
            suggestions=list(data.get("suggestions", [])),
            metadata=ScoringMetadata(**data.get("metadata", {})),
        )
