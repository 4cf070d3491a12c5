"\"\"\"Recommendation engine orchestration.\"\"\""

from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Real
from typing import Any, Sequence

import structlog

from ..errors import InvalidInputError
from .catalog import CareerCatalog, CareerProfile
from .matcher import MatchScore, SkillMatcher
from .skills import Skill, SkillNormalizer


@dataclass(frozen=True, slots=True)
class RecommendOptions:
    """Validated per-request options."""

    limit: int = 5
    min_score: float = 0.0

    def __post_init__(self) -> None:
        if isinstance(self.limit, bool) or not isinstance(self.limit, int):
            raise InvalidInputError(f"limit must be an integer, got {self.limit!r}")
        if self.limit <= 0:
            raise InvalidInputError(f"limit must be positive, got {self.limit}")
        if isinstance(self.min_score, bool) or not isinstance(self.min_score, Real):
            raise InvalidInputError(f"min_score must be a number, got {self.min_score!r}")
        if not math.isfinite(self.min_score) or not 0.0 <= self.min_score <= 1.0:
            raise InvalidInputError(f"min_score must be within [0, 1], got {self.min_score}")


@dataclass(frozen=True, slots=True)
class Recommendation:
    """A career profile paired with its match score."""

    career: CareerProfile
    score: MatchScore

    def to_dict(self) -> dict[str, Any]:
        return {
            "career": self.career.to_dict(),
            "score": self.score.to_dict(),
        }


class RecommendationEngine:
    """Scores every catalog profile against a candidate and ranks the results."""

    def __init__(
        self,
        catalog: CareerCatalog,
        *,
        normalizer: SkillNormalizer | None = None,
        matcher: SkillMatcher | None = None,
        defaults: RecommendOptions | None = None,
    ) -> None:
        self._catalog = catalog
        self._normalizer = normalizer or SkillNormalizer()
        self._matcher = matcher or SkillMatcher()
        self._defaults = defaults or RecommendOptions()
        self._logger = structlog.get_logger(__name__)

    @property
    def catalog(self) -> CareerCatalog:
        return self._catalog

    @property
    def defaults(self) -> RecommendOptions:
        return self._defaults

    def resolve_options(self, limit: int | None = None, min_score: float | None = None) -> RecommendOptions:
        """Merge explicit values over the engine defaults and validate them."""
        return RecommendOptions(
            limit=self._defaults.limit if limit is None else limit,
            min_score=self._defaults.min_score if min_score is None else min_score,
        )

    def recommend(
        self,
        raw_skills: Sequence[str],
        limit: int | None = None,
        min_score: float | None = None,
    ) -> list[Recommendation]:
        options = self.resolve_options(limit, min_score)
        candidate_skills = self.normalize_candidate(raw_skills)

        recommendations: list[Recommendation] = []
        skipped_unscoreable = 0
        for profile in self._catalog.all():
            score = self._matcher.score(candidate_skills, profile)
            if not score.scoreable:
                skipped_unscoreable += 1
                continue
            if score.value < options.min_score:
                continue
            recommendations.append(Recommendation(career=profile, score=score))

        recommendations.sort(key=_ranking_key)
        selected = recommendations[: options.limit]

        self._logger.debug(
            "recommend.completed",
            candidate_skills=len(candidate_skills),
            catalog_size=len(self._catalog),
            eligible=len(recommendations),
            returned=len(selected),
            unscoreable=skipped_unscoreable,
            limit=options.limit,
            min_score=options.min_score,
        )
        return selected

    def explain(self, raw_skills: Sequence[str], career_id: str) -> Recommendation | None:
        """Score a single career; ``None`` when the id is not in the catalog."""
        profile = self._catalog.by_id(career_id)
        if profile is None:
            return None
        candidate_skills = self.normalize_candidate(raw_skills)
        return Recommendation(career=profile, score=self._matcher.score(candidate_skills, profile))

    def normalize_candidate(self, raw_skills: Sequence[str]) -> frozenset[Skill]:
        if raw_skills is None or isinstance(raw_skills, (str, bytes)):
            raise InvalidInputError("Candidate skills must be a sequence of strings")
        try:
            skills = self._normalizer.normalize_all(raw_skills)
        except TypeError as exc:
            raise InvalidInputError("Candidate skills must be a sequence of strings") from exc
        if not skills:
            raise InvalidInputError("Candidate skill set is empty after normalization")
        return frozenset(skills)


def _ranking_key(recommendation: Recommendation) -> tuple[float, int, str, str]:
    return (
        -round(recommendation.score.value, 9),
        -recommendation.score.matched_required_count,
        recommendation.career.title,
        recommendation.career.id,
    )


__all__ = ["Recommendation", "RecommendationEngine", "RecommendOptions"]
