#!/usr/bin/env python3
"""
Scoring Service - Cache-aware orchestration around the ATS engine.

The engine itself is pure; this service is where the stateful concerns live:
- resolves tenant weights from configuration
- looks up / stores results in the score cache
- measures wall-clock processing time
- fills metadata.cache_hit and metadata.processing_time_ms

Designed to be microservice-ready: any worker can serve any request because
all shared state is in the (optional) cache.
"""

from typing import TYPE_CHECKING, List, Mapping, Optional, Dict, Sequence, Tuple
import logging
import time

from core.scorer.ats_engine import resolve_weights, score_resume_against_job
from core.scorer.errors import ScoringInputError
from core.scorer.models import JobInput, ResumeInput, ScoringContext, ScoringResult

if TYPE_CHECKING:
    from core.cache.score_cache import ScoreCacheService
    from core.config_loader import ScoringConfig

logger = logging.getLogger(__name__)


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000.0, 3)


class ScoringService:
    """
    Service for resume-to-job ATS scoring.

    Weight precedence per component: per-call override on the context,
    then the tenant's configured weights, then configured defaults, then
    the engine's built-in defaults.
    """

    def __init__(
        self,
        config: "ScoringConfig",
        cache: Optional["ScoreCacheService"] = None
    ):
        self.config = config
        self.cache = cache if config.cache_enabled else None

    def effective_weights(self, context: ScoringContext) -> Dict[str, float]:
        """Merge configured and per-call weights; unknown tenants use defaults."""
        merged: Dict[str, float] = dict(self.config.default_weights.as_strategy())

        tenant_weights = self.config.tenant_weights.get(context.tenant_id)
        if tenant_weights is not None:
            merged.update(tenant_weights.as_strategy())

        if context.weights is not None and not isinstance(context.weights, Mapping):
            raise ScoringInputError(f"weights must be a mapping, got {type(context.weights).__name__}")
        if context.weights:
            merged.update({k: v for k, v in context.weights.items() if v is not None})

        return resolve_weights(merged)

    def score(
        self,
        resume: ResumeInput,
        job: JobInput,
        context: ScoringContext
    ) -> ScoringResult:
        """Score one resume against one job, using the cache when configured.

        Never raises: bad weight overrides and cache failures are logged and
        produce the same results the engine would give without them.

        Args:
            resume: Parsed resume
            job: Parsed job description
            context: Tenant/job/resume identifiers and optional overrides

        Returns:
            ScoringResult with cache_hit and processing_time_ms filled in
        """
        start = time.perf_counter()

        try:
            weights = self.effective_weights(context)
        except ScoringInputError as e:
            logger.warning(f"Invalid weight overrides for tenant {context.tenant_id}: {e}")
            result = ScoringResult.zero()
            result.metadata.processing_time_ms = _elapsed_ms(start)
            return result

        key = None
        if self.cache is not None:
            key = self.cache.make_key(context, weights)
            cached = self.cache.get_result(key)
            if cached is not None:
                cached.metadata.cache_hit = True
                cached.metadata.processing_time_ms = _elapsed_ms(start)
                logger.debug(f"Served cached score for job {context.job_id}, resume {context.resume_id}")
                return cached

        engine_context = ScoringContext(
            tenant_id=context.tenant_id,
            job_id=context.job_id,
            resume_id=context.resume_id,
            weights=weights
        )
        result = score_resume_against_job(resume, job, engine_context)

        # Zero results may come from malformed input; don't pin them in the cache
        if key is not None and result.score > 0:
            self.cache.set_result(key, result, ttl_seconds=self.config.cache_ttl_seconds)

        result.metadata.cache_hit = False
        result.metadata.processing_time_ms = _elapsed_ms(start)

        logger.debug(
            f"Scored job {context.job_id} for resume {context.resume_id}: "
            f"{result.score} in {result.metadata.processing_time_ms}ms"
        )
        return result

    def score_many(
        self,
        resume: ResumeInput,
        jobs: Sequence[Tuple[str, JobInput]],
        tenant_id: str,
        resume_id: str
    ) -> List[Tuple[str, ScoringResult]]:
        """Score one resume against several jobs.

        Args:
            resume: Parsed resume
            jobs: (job_id, job) pairs
            tenant_id: Tenant identifier
            resume_id: Resume identifier

        Returns:
            (job_id, result) pairs sorted by score (highest first); ties keep
            input order
        """
        scored = [
            (job_id, self.score(resume, job, ScoringContext(tenant_id=tenant_id, job_id=job_id, resume_id=resume_id)))
            for job_id, job in jobs
        ]
        scored.sort(key=lambda x: x[1].score, reverse=True)

        logger.info(f"Ranked {len(scored)} jobs for resume {resume_id} (tenant {tenant_id})")
        return scored
