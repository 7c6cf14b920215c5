#!/usr/bin/env python3
"""
Request models for API endpoints.

Field names are snake_case; the camelCase names produced by the resume
parsing pipeline and job catalog are accepted as aliases.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional

from core.config_loader import WeightsConfig
from core.scorer.models import (
    EducationInput,
    ExperienceInput,
    JobInput,
    ResumeInput,
    ScoringContext,
)

MAX_RANK_JOBS = 50


class ExperiencePayload(BaseModel):
    years: Optional[float] = Field(default=None, ge=0)


class EducationPayload(BaseModel):
    level: Optional[str] = None


class ResumePayload(BaseModel):
    """Parsed resume as produced by the parsing pipeline."""
    skills: List[str] = Field(default_factory=list)
    experience: Optional[ExperiencePayload] = None
    education: Optional[EducationPayload] = None
    summary: Optional[str] = None
    certifications: List[str] = Field(default_factory=list)
    projects: List[str] = Field(default_factory=list)
    publications: List[str] = Field(default_factory=list)
    awards: List[str] = Field(default_factory=list)

    def to_input(self) -> ResumeInput:
        return ResumeInput(
            skills=list(self.skills),
            experience=ExperienceInput(years=self.experience.years) if self.experience else None,
            education=EducationInput(level=self.education.level) if self.education else None,
            summary=self.summary,
            certifications=list(self.certifications),
            projects=list(self.projects),
            publications=list(self.publications),
            awards=list(self.awards),
        )


class JobPayload(BaseModel):
    """Job description facts from the job catalog."""
    model_config = ConfigDict(populate_by_name=True)

    required_skills: List[str] = Field(default_factory=list, alias="requiredSkills")
    preferred_skills: List[str] = Field(default_factory=list, alias="preferredSkills")
    required_experience_years: Optional[float] = Field(default=None, ge=0, alias="requiredExperienceYears")
    required_education_level: str = Field(alias="requiredEducationLevel")
    title: Optional[str] = None
    description: Optional[str] = None

    def to_input(self) -> JobInput:
        return JobInput(
            required_experience_years=self.required_experience_years,
            required_education_level=self.required_education_level,
            required_skills=list(self.required_skills),
            preferred_skills=list(self.preferred_skills),
            title=self.title,
            description=self.description,
        )


class ScoreRequest(BaseModel):
    """Request to score one resume against one job."""
    model_config = ConfigDict(populate_by_name=True)

    tenant_id: str = Field(..., min_length=1, alias="tenantId")
    job_id: str = Field(..., min_length=1, alias="jobId")
    resume_id: str = Field(..., min_length=1, alias="resumeId")
    resume: ResumePayload
    job: JobPayload
    weights: Optional[WeightsConfig] = Field(default=None, description="Per-call weight overrides")

    def to_context(self) -> ScoringContext:
        return ScoringContext(
            tenant_id=self.tenant_id,
            job_id=self.job_id,
            resume_id=self.resume_id,
            weights=self.weights.as_strategy() if self.weights else None,
        )


class RankJobEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    job_id: str = Field(..., min_length=1, alias="jobId")
    job: JobPayload


class RankRequest(BaseModel):
    """Request to rank several jobs for one resume."""
    model_config = ConfigDict(populate_by_name=True)

    tenant_id: str = Field(..., min_length=1, alias="tenantId")
    resume_id: str = Field(..., min_length=1, alias="resumeId")
    resume: ResumePayload
    jobs: List[RankJobEntry] = Field(..., min_length=1, max_length=MAX_RANK_JOBS)
