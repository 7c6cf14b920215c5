#!/usr/bin/env python3
"""
Scoring Constants - Weights, limits and version identifiers.

Every tunable number used by the ATS engine lives here. Changing any value
changes scoring output for all tenants that do not override it per call, so
bump SCORING_VERSION together with the values.
"""

from types import MappingProxyType

SCORING_VERSION = "v1.0.0"

# Top-level weight distribution; must sum to 1.0
SCORE_WEIGHTS = MappingProxyType({
    "skill": 0.4,
    "experience": 0.2,
    "education": 0.2,
    "completeness": 0.1,
    "bonus": 0.1,
})

SCORE_COMPONENTS = tuple(SCORE_WEIGHTS.keys())

# Ordinal ladder, higher means more education
EDUCATION_LEVELS = MappingProxyType({
    "none": 0,
    "associate": 1,
    "bachelor": 2,
    "master": 3,
    "phd": 4,
})

REQUIRED_RESUME_SECTIONS = ("skills", "experience", "education", "summary")

BONUS_ITEMS = ("certifications", "projects", "publications", "awards")

# Bonus contribution as a fraction of the total score
MAX_BONUS_PER_ITEM = 0.025
MAX_TOTAL_BONUS = 0.1

# Seniority bands in years (reserved, not scored)
EXPERIENCE_THRESHOLDS = MappingProxyType({
    "junior": 2,
    "mid": 4,
    "senior": 7,
})

# 64 KiB per textual field
MAX_PAYLOAD_BYTES = 65_536

# 1 hour
CACHE_TTL_SECONDS = 3_600

REDIS_KEY_PREFIX = "smarthire:ats"

MAX_KEYWORDS = 200
