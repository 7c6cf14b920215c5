"""
Tests for scoring configuration loading.
"""
from pathlib import Path

import pytest
from pydantic import ValidationError

from core.config_loader import AppConfig, ScoringConfig, WeightsConfig, load_config
from core.scorer.constants import CACHE_TTL_SECONDS, SCORE_WEIGHTS

PROJECT_ROOT = Path(__file__).resolve().parents[4]

ENV_VARS = ("REDIS_URL", "REDIS_PASSWORD", "WEB_HOST", "WEB_PORT", "SCORING_CACHE_ENABLED")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "scoring:\n"
        "  default_weights:\n"
        "    skill: 0.5\n"
        "  tenant_weights:\n"
        "    acme-corp:\n"
        "      bonus: 0.0\n"
        "  cache_ttl_seconds: 120\n"
        "cache:\n"
        "  redis_url: redis://cache.internal:6379/1\n"
        "web:\n"
        "  port: 9000\n"
    )
    return path


class TestScoringConfigDefaults:

    def test_defaults_match_engine_weights(self):
        config = ScoringConfig()
        assert config.default_weights.as_strategy() == dict(SCORE_WEIGHTS)
        assert config.tenant_weights == {}
        assert config.cache_enabled is True
        assert config.cache_ttl_seconds == CACHE_TTL_SECONDS

    def test_app_config_defaults(self):
        config = AppConfig()
        assert config.cache.redis_url == "redis://localhost:6379/0"
        assert config.web.port == 8080
        assert config.web.rate_limit == "60/minute"


class TestWeightsConfig:

    def test_partial_strategy_only_contains_set_components(self):
        assert WeightsConfig(skill=0.5, bonus=0.0).as_strategy() == {"skill": 0.5, "bonus": 0.0}

    def test_negative_weight_rejected(self):
        with pytest.raises(ValidationError):
            WeightsConfig(skill=-0.1)

    def test_non_positive_ttl_rejected(self):
        with pytest.raises(ValidationError):
            ScoringConfig(cache_ttl_seconds=0)


class TestLoadConfig:

    def test_load_from_yaml(self, config_file):
        config = load_config(str(config_file))

        assert config.scoring.default_weights.as_strategy() == {"skill": 0.5}
        assert config.scoring.tenant_weights["acme-corp"].as_strategy() == {"bonus": 0.0}
        assert config.scoring.cache_ttl_seconds == 120
        assert config.cache.redis_url == "redis://cache.internal:6379/1"
        assert config.web.port == 9000
        assert config.web.host == "0.0.0.0"

    def test_env_overrides(self, config_file, monkeypatch):
        monkeypatch.setenv("REDIS_URL", "redis://override:6379/0")
        monkeypatch.setenv("REDIS_PASSWORD", "secret")
        monkeypatch.setenv("WEB_HOST", "127.0.0.1")
        monkeypatch.setenv("WEB_PORT", "9100")
        monkeypatch.setenv("SCORING_CACHE_ENABLED", "false")

        config = load_config(str(config_file))

        assert config.cache.redis_url == "redis://override:6379/0"
        assert config.cache.password == "secret"
        assert config.web.host == "127.0.0.1"
        assert config.web.port == 9100
        assert config.scoring.cache_enabled is False

    def test_empty_file_uses_defaults(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("")

        config = load_config(str(path))

        assert config.scoring.default_weights.as_strategy() == dict(SCORE_WEIGHTS)

    def test_example_config_is_valid(self):
        config = load_config(str(PROJECT_ROOT / "config.example.yaml"))

        assert config.scoring.tenant_weights["acme-corp"].as_strategy() == {"skill": 0.5, "bonus": 0.0}
        assert config.scoring.l1_ttl_seconds == 300
