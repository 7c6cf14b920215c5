#!/usr/bin/env python3
"""
Scoring endpoints - ATS resume-to-job scoring.
"""

import logging
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

from core.scorer.service import ScoringService
from ..config import get_config
from ..dependencies import get_scoring_service
from ..exceptions import CacheUnavailableException, InvalidScoringRequestException
from ..models.requests import RankRequest, ScoreRequest
from ..models.responses import (
    CacheClearResponse,
    CacheStatsResponse,
    RankedJob,
    RankResponse,
    ScoreResponse,
    ScoringResultModel,
)

logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address)

router = APIRouter(prefix="/api/scoring", tags=["scoring"])


def _rate_limit() -> str:
    return get_config().web.rate_limit


def add_rate_limit_handlers(app):
    """Add rate limit exception handlers to the FastAPI app."""
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


async def _rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    return JSONResponse(
        status_code=429,
        content={"detail": str(exc)}
    )


@router.post("/score", response_model=ScoreResponse)
@limiter.limit(_rate_limit)
def score_resume(
    request: Request,
    body: ScoreRequest,
    service: ScoringService = Depends(get_scoring_service)
):
    """
    Score a parsed resume against a job description.

    Always returns a result: input the engine cannot use scores 0 with no
    suggestions. Validate inputs upstream if that case must be told apart
    from a genuine zero match.
    """
    result = service.score(
        body.resume.to_input(),
        body.job.to_input(),
        body.to_context()
    )

    return ScoreResponse(success=True, result=ScoringResultModel.from_result(result))


@router.post("/rank", response_model=RankResponse)
@limiter.limit(_rate_limit)
def rank_jobs(
    request: Request,
    body: RankRequest,
    service: ScoringService = Depends(get_scoring_service)
):
    """Rank several jobs for one resume, best match first."""
    job_ids = [entry.job_id for entry in body.jobs]
    if len(set(job_ids)) != len(job_ids):
        raise InvalidScoringRequestException("Duplicate job_id values in rank request")

    ranked = service.score_many(
        body.resume.to_input(),
        [(entry.job_id, entry.job.to_input()) for entry in body.jobs],
        tenant_id=body.tenant_id,
        resume_id=body.resume_id
    )

    return RankResponse(
        success=True,
        count=len(ranked),
        results=[
            RankedJob(job_id=job_id, result=ScoringResultModel.from_result(result))
            for job_id, result in ranked
        ]
    )


@router.get("/cache/stats", response_model=CacheStatsResponse)
def get_cache_stats(service: ScoringService = Depends(get_scoring_service)):
    """Report score cache status."""
    if service.cache is None:
        return CacheStatsResponse(success=True, enabled=False)

    return CacheStatsResponse(success=True, enabled=True, stats=service.cache.get_cache_stats())


@router.delete("/cache/{tenant_id}", response_model=CacheClearResponse)
def clear_tenant_cache(
    tenant_id: str,
    service: ScoringService = Depends(get_scoring_service)
):
    """Drop cached scores for one tenant (e.g. after changing its weights)."""
    if service.cache is None:
        raise CacheUnavailableException("Score caching is disabled")

    deleted = service.cache.clear_tenant(tenant_id)
    logger.info(f"Cleared {deleted} cached scores for tenant {tenant_id}")

    return CacheClearResponse(
        success=True,
        tenant_id=tenant_id,
        deleted=deleted,
        message=f"Cleared {deleted} cached scores"
    )
