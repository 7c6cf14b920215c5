#!/usr/bin/env python3
"""
Scoring Module - ATS resume-to-job scoring.

Public API:
- score_resume_against_job: Pure scoring engine entry point
- ScoringService: Cache-aware orchestrator used by the API layer
- ResumeInput, JobInput, ScoringContext, ScoringResult: Boundary contracts

Layout:

- constants.py: Weights, caps, version identifiers
- normalization.py: Keyword/education normalization, truncation, suggestions
- models.py: Input and result dataclasses
- ats_engine.py: Component scorers and the weighted aggregator
- errors.py: ScoringInputError
- service.py: ScoringService orchestrator
"""

from core.scorer.ats_engine import score_resume_against_job
from core.scorer.models import (
    ResumeInput, JobInput, ExperienceInput, EducationInput,
    ScoringContext, ScoringResult, ScoreBreakdown, ScoringMetadata
)
from core.scorer.service import ScoringService

__all__ = [
    'score_resume_against_job', 'ScoringService',
    'ResumeInput', 'JobInput', 'ExperienceInput', 'EducationInput',
    'ScoringContext', 'ScoringResult', 'ScoreBreakdown', 'ScoringMetadata'
]
