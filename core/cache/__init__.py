"""Cache Module - Caching services."""
from core.cache.score_cache import (
    ScoreCacheService,
    LocalLRUCache,
    get_score_cache,
    init_score_cache,
    CACHE_TTL_SECONDS
)

__all__ = [
    'ScoreCacheService',
    'LocalLRUCache',
    'get_score_cache',
    'init_score_cache',
    'CACHE_TTL_SECONDS'
]
