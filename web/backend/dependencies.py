#!/usr/bin/env python3
"""
FastAPI dependencies for dependency injection.
"""

import logging
from functools import lru_cache

from core.cache.score_cache import init_score_cache
from core.scorer.service import ScoringService
from .config import get_config

logger = logging.getLogger(__name__)


@lru_cache()
def get_scoring_service() -> ScoringService:
    """
    FastAPI dependency that returns the process-wide ScoringService.

    The Redis connection is opened on first use. If caching is disabled in
    config, the service scores without a cache.

    Usage:
        @router.post("/score")
        def score(service: ScoringService = Depends(get_scoring_service)):
            ...
    """
    config = get_config()
    scoring_config = config.scoring

    cache = None
    if scoring_config.cache_enabled:
        cache = init_score_cache(
            config.cache.redis_url,
            config.cache.password,
            ttl_seconds=scoring_config.cache_ttl_seconds,
            l1_max_entries=scoring_config.l1_max_entries,
            l1_ttl_seconds=scoring_config.l1_ttl_seconds
        )
    else:
        logger.info("Score caching disabled by configuration")

    return ScoringService(scoring_config, cache)
