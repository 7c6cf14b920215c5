#!/usr/bin/env python3
"""
Response models for API endpoints.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Dict, Any

from core.scorer.models import ScoringResult


class ScoreBreakdownModel(BaseModel):
    skill_score: int = Field(ge=0, le=100)
    experience_score: int = Field(ge=0, le=100)
    education_score: int = Field(ge=0, le=100)
    completeness_score: int = Field(ge=0, le=100)
    bonus_score: int = Field(ge=0, le=100)


class ScoringMetadataModel(BaseModel):
    processing_time_ms: float
    version: str
    cache_hit: bool


class ScoringResultModel(BaseModel):
    """ATS score with breakdown, keywords and suggestions."""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "score": 90,
                "breakdown": {
                    "skill_score": 100,
                    "experience_score": 100,
                    "education_score": 100,
                    "completeness_score": 100,
                    "bonus_score": 0
                },
                "matched_keywords": ["javascript", "typescript"],
                "missing_keywords": [],
                "suggestions": [
                    "Add relevant certifications, projects, publications, or awards to unlock "
                    "additional bonus score and stand out."
                ],
                "metadata": {"processing_time_ms": 0.41, "version": "v1.0.0", "cache_hit": False}
            }
        }
    )

    score: int = Field(ge=0, le=100)
    breakdown: ScoreBreakdownModel
    matched_keywords: List[str]
    missing_keywords: List[str]
    suggestions: List[str]
    metadata: ScoringMetadataModel

    @classmethod
    def from_result(cls, result: ScoringResult) -> "ScoringResultModel":
        return cls.model_validate(result.to_dict())


class ScoreResponse(BaseModel):
    success: bool
    result: ScoringResultModel


class RankedJob(BaseModel):
    job_id: str
    result: ScoringResultModel


class RankResponse(BaseModel):
    success: bool
    count: int
    results: List[RankedJob]


class CacheStatsResponse(BaseModel):
    success: bool
    enabled: bool
    stats: Dict[str, Any] = Field(default_factory=dict)


class CacheClearResponse(BaseModel):
    success: bool
    tenant_id: str
    deleted: int
    message: Optional[str] = None
