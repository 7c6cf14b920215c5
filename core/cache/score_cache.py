"""Score Cache Service - two-tier caching for ATS scoring results.

L1: bounded in-process LRU, absorbs hot-key bursts without a network hop.
L2: Redis, shared by all workers. Keys carry a {tenant_id} hashtag so a
tenant's entries live on one Redis Cluster slot.
"""
import hashlib
import json
import logging
import threading
import time
from collections import OrderedDict
from datetime import datetime, timezone
from typing import Optional, Dict, Any, Tuple, Mapping
from urllib.parse import urlparse

from redis import Redis

from core.scorer.constants import CACHE_TTL_SECONDS, REDIS_KEY_PREFIX, SCORING_VERSION
from core.scorer.models import ScoringContext, ScoringResult

logger = logging.getLogger(__name__)


def _sanitize_url(url: str) -> str:
    """Remove credentials from URL for safe logging."""
    try:
        parsed = urlparse(url)
        if parsed.password:
            sanitized = parsed._replace(
                netloc=f"{parsed.username or ''}:*@{parsed.hostname}:{parsed.port or 6379}"
            )
            return sanitized.geturl()
        return url
    except Exception:
        return url


def weights_fingerprint(weights: Mapping[str, float]) -> str:
    """Short stable hash of an effective weight mapping."""
    canonical = json.dumps(dict(weights), sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(canonical.encode('utf-8')).hexdigest()[:12]


class LocalLRUCache:
    """
    Thread-safe in-process LRU with optional per-entry TTL.

    Values are stored as plain dicts so callers always get a fresh
    ScoringResult and cannot mutate what other requests will read.
    """

    def __init__(self, max_entries: int = 1000, ttl_seconds: Optional[int] = None):
        self.max_entries = max_entries
        self.ttl_seconds = ttl_seconds
        self._entries: "OrderedDict[str, Tuple[Optional[float], Dict[str, Any]]]" = OrderedDict()
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            expires_at, value = entry
            if expires_at is not None and expires_at <= time.monotonic():
                del self._entries[key]
                return None
            self._entries.move_to_end(key)
            return value

    def set(self, key: str, value: Dict[str, Any], ttl_seconds: Optional[int] = None) -> None:
        if self.max_entries <= 0:
            return
        ttl = ttl_seconds or self.ttl_seconds
        expires_at = time.monotonic() + ttl if ttl else None
        with self._lock:
            self._entries[key] = (expires_at, value)
            self._entries.move_to_end(key)
            while len(self._entries) > self.max_entries:
                self._entries.popitem(last=False)

    def delete(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def delete_prefix(self, prefix: str) -> int:
        with self._lock:
            doomed = [k for k in self._entries if k.startswith(prefix)]
            for k in doomed:
                del self._entries[k]
            return len(doomed)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


class ScoreCacheService:
    """
    Service for caching scoring results keyed by (tenant, job, resume, weights).

    Redis trouble never reaches the caller: reads degrade to a miss and writes
    to a no-op. The L1 keeps working while Redis is down.
    """

    def __init__(
        self,
        redis_url: str = "redis://localhost:6379/0",
        password: Optional[str] = None,
        ttl_seconds: int = CACHE_TTL_SECONDS,
        l1_max_entries: int = 1000,
        l1_ttl_seconds: Optional[int] = None
    ):
        self.redis_url = redis_url
        self.password = password
        self.ttl_seconds = ttl_seconds
        self.local = LocalLRUCache(max_entries=l1_max_entries, ttl_seconds=l1_ttl_seconds or ttl_seconds)
        self._redis: Optional[Redis] = None
        self._available = False

        try:
            self._redis = Redis.from_url(
                redis_url,
                password=password,
                decode_responses=True,
                socket_connect_timeout=5,
                socket_timeout=5
            )
            self._redis.ping()
            self._available = True
            logger.info(f"Score cache connected to Redis at {_sanitize_url(redis_url)}")
        except Exception as e:
            logger.warning(f"Score cache Redis unavailable, using in-process cache only: {e}")
            self._redis = None
            self._available = False

    @property
    def is_available(self) -> bool:
        """Check if the Redis tier is available."""
        if not self._available or not self._redis:
            return False
        try:
            return self._redis.ping()
        except Exception:
            return False

    @staticmethod
    def tenant_prefix(tenant_id: str) -> str:
        return f"{REDIS_KEY_PREFIX}:{{{tenant_id}}}:"

    def make_key(self, context: ScoringContext, weights: Mapping[str, float]) -> str:
        """
        Create a cache key for one scoring call.

        Format: smarthire:ats:{tenant}:<version>:<job>:<resume>:<weights-hash>
        The engine version is part of the key so a new engine never reads
        results computed by an older one.
        """
        return (
            f"{self.tenant_prefix(context.tenant_id)}{SCORING_VERSION}:"
            f"{context.job_id}:{context.resume_id}:{weights_fingerprint(weights)}"
        )

    def get_result(self, key: str) -> Optional[ScoringResult]:
        """Get a cached result, L1 first then Redis."""
        data = self.local.get(key)
        if data is not None:
            logger.debug(f"L1 cache hit for {key}")
            return ScoringResult.from_dict(data)

        if not self.is_available:
            return None

        try:
            raw = self._redis.get(key)
            if not raw:
                logger.debug(f"Cache miss for {key}")
                return None

            cache_entry = json.loads(raw)
            data = cache_entry.get("data")
            if data is None:
                return None

            self.local.set(key, data)
            logger.debug(f"L2 cache hit for {key}")
            return ScoringResult.from_dict(data)

        except Exception as e:
            logger.warning(f"Error reading from score cache: {e}")
            return None

    def set_result(
        self,
        key: str,
        result: ScoringResult,
        ttl_seconds: Optional[int] = None
    ) -> bool:
        """Cache a result in both tiers. Returns True if Redis accepted it."""
        data = result.to_dict()
        self.local.set(key, data)

        if not self.is_available:
            return False

        try:
            ttl = ttl_seconds or self.ttl_seconds
            cache_entry = {
                "data": data,
                "cached_at": datetime.now(timezone.utc).isoformat(),
                "ttl_seconds": ttl
            }

            self._redis.setex(key, ttl, json.dumps(cache_entry))
            logger.debug(f"Cached score for {key} (TTL: {ttl}s)")
            return True

        except Exception as e:
            logger.warning(f"Error writing to score cache: {e}")
            return False

    def delete_result(self, key: str) -> bool:
        """Remove one result from both tiers."""
        self.local.delete(key)
        if not self.is_available:
            return False

        try:
            self._redis.delete(key)
            return True
        except Exception as e:
            logger.warning(f"Error deleting from score cache: {e}")
            return False

    def clear_tenant(self, tenant_id: str) -> int:
        """Drop every cached result for a tenant. Returns the Redis key count removed."""
        prefix = self.tenant_prefix(tenant_id)
        self.local.delete_prefix(prefix)

        if not self.is_available:
            return 0

        try:
            cursor = 0
            deleted = 0
            while True:
                cursor, keys = self._redis.scan(cursor=cursor, match=f"{prefix}*", count=100)
                if keys:
                    self._redis.delete(*keys)
                    deleted += len(keys)
                if cursor == 0:
                    break

            logger.info(f"Cleared {deleted} cached scores for tenant {tenant_id}")
            return deleted

        except Exception as e:
            logger.warning(f"Error clearing score cache for tenant {tenant_id}: {e}")
            return 0

    def get_cache_stats(self) -> Dict[str, Any]:
        """Get cache statistics."""
        stats: Dict[str, Any] = {
            "available": self.is_available,
            "l1_entries": len(self.local),
            "l1_max_entries": self.local.max_entries,
            "ttl_seconds": self.ttl_seconds,
        }
        if not stats["available"]:
            return stats

        try:
            info = self._redis.info()
            stats["used_memory_human"] = info.get("used_memory_human", "unknown")
        except Exception as e:
            logger.warning(f"Error getting cache stats: {e}")
            stats["error"] = str(e)
        return stats


# Global instance for application use
_score_cache: Optional[ScoreCacheService] = None


def get_score_cache() -> Optional[ScoreCacheService]:
    """Get global score cache instance."""
    return _score_cache


def init_score_cache(
    redis_url: str,
    password: Optional[str] = None,
    ttl_seconds: int = CACHE_TTL_SECONDS,
    l1_max_entries: int = 1000,
    l1_ttl_seconds: Optional[int] = None
) -> ScoreCacheService:
    """Initialize global score cache."""
    global _score_cache
    _score_cache = ScoreCacheService(
        redis_url,
        password,
        ttl_seconds=ttl_seconds,
        l1_max_entries=l1_max_entries,
        l1_ttl_seconds=l1_ttl_seconds
    )
    return _score_cache
