import yaml
import os
import logging
from typing import Optional, Dict, Any
from pydantic import BaseModel, Field

from core.scorer.constants import CACHE_TTL_SECONDS, SCORE_WEIGHTS

logger = logging.getLogger(__name__)


class WeightsConfig(BaseModel):
    """Partial weight override; omitted components fall back to the defaults."""
    skill: Optional[float] = Field(default=None, ge=0)
    experience: Optional[float] = Field(default=None, ge=0)
    education: Optional[float] = Field(default=None, ge=0)
    completeness: Optional[float] = Field(default=None, ge=0)
    bonus: Optional[float] = Field(default=None, ge=0)

    def as_strategy(self) -> Dict[str, float]:
        """Only the components that are actually set."""
        return self.model_dump(exclude_none=True)


class ScoringConfig(BaseModel):
    """
    Configuration for the ScoringService.

    default_weights applies to every tenant without its own entry in
    tenant_weights. Per-call overrides on ScoringContext always win.
    """
    default_weights: WeightsConfig = Field(default_factory=lambda: WeightsConfig(**SCORE_WEIGHTS))
    tenant_weights: Dict[str, WeightsConfig] = Field(default_factory=dict)

    cache_enabled: bool = True
    cache_ttl_seconds: int = Field(default=CACHE_TTL_SECONDS, gt=0)
    # In-process L1 in front of Redis
    l1_max_entries: int = Field(default=1000, ge=0)
    l1_ttl_seconds: Optional[int] = Field(default=300, gt=0)


class CacheConfig(BaseModel):
    redis_url: str = "redis://localhost:6379/0"
    password: Optional[str] = None


class WebConfig(BaseModel):
    """Web server configuration."""
    host: str = "0.0.0.0"
    port: int = 8080
    rate_limit: str = "60/minute"  # slowapi limit string for scoring routes


class AppConfig(BaseModel):
    scoring: ScoringConfig = Field(default_factory=ScoringConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    web: WebConfig = Field(default_factory=WebConfig)


def _apply_env_overrides(data: Dict[str, Any]) -> Dict[str, Any]:
    """Apply environment variable overrides on top of the YAML data."""
    env_redis_url = os.environ.get("REDIS_URL")
    if env_redis_url:
        data.setdefault('cache', {})
        data['cache']['redis_url'] = env_redis_url

    env_redis_password = os.environ.get("REDIS_PASSWORD")
    if env_redis_password:
        data.setdefault('cache', {})
        data['cache']['password'] = env_redis_password

    env_web_host = os.environ.get("WEB_HOST")
    if env_web_host:
        data.setdefault('web', {})
        data['web']['host'] = env_web_host

    env_web_port = os.environ.get("WEB_PORT")
    if env_web_port:
        data.setdefault('web', {})
        data['web']['port'] = int(env_web_port)

    env_cache_enabled = os.environ.get("SCORING_CACHE_ENABLED")
    if env_cache_enabled:
        data.setdefault('scoring', {})
        data['scoring']['cache_enabled'] = env_cache_enabled.strip().lower() in ("true", "1", "yes", "on")

    return data


def load_config(config_path: str = "config.yaml") -> AppConfig:
    # If not found at relative path (e.g. running from root), try the project root
    if not os.path.exists(config_path):
        base_dir = os.path.dirname(os.path.abspath(__file__))
        config_path = os.path.join(base_dir, "..", "config.yaml")

    data: Dict[str, Any] = {}
    if os.path.exists(config_path):
        with open(config_path, "r") as f:
            data = yaml.safe_load(f) or {}
    else:
        logger.info("No config.yaml found; using defaults")

    data = _apply_env_overrides(data)

    return AppConfig(**data)
