"\"\"\"Core matching and recommendation components.\"\"\""

from __future__ import annotations

# NOTE: keep imports explicit for export clarity.
from .catalog import CareerCatalog, CareerProfile
from .engine import Recommendation, RecommendationEngine, RecommendOptions
from .matcher import MatchScore, MatchType, SkillMatch, SkillMatcher, SkillMatcherConfig
from .skills import DEFAULT_ALIASES, Skill, SkillNormalizer

__all__ = [
    "CareerCatalog",
    "CareerProfile",
    "DEFAULT_ALIASES",
    "MatchScore",
    "MatchType",
    "Recommendation",
    "RecommendationEngine",
    "RecommendOptions",
    "Skill",
    "SkillMatch",
    "SkillMatcher",
    "SkillMatcherConfig",
    "SkillNormalizer",
]
