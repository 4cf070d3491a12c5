"\"\"\"Pairwise skill classification and weighted overlap scoring.\"\"\""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Literal

from .catalog import CareerProfile
from .skills import Skill

Requirement = Literal["required", "desirable"]
ScoreBasis = Literal["required", "combined"]


class MatchType(str, Enum):
    EXACT = "exact"
    SYNONYM = "synonym"
    PARTIAL = "partial"
    NONE = "none"


@dataclass
class SkillMatcherConfig:
    """Weights and thresholds for skill overlap scoring.

    ``score_basis`` picks the denominator of the weighted sum:

    * ``"combined"`` divides by ``|required| * required_weight +
      |desirable| * desirable_weight``, the plain weighted-overlap ratio.
    * ``"required"`` (default) divides by the required maximum only and caps
      the result at 1.0, so desirable hits act as a bonus and a candidate
      holding every required skill scores 1.0. Profiles without required
      skills fall back to the combined denominator.

    Both bases keep scores in [0, 1] and monotonic in the candidate set.
    """

    required_weight: float = 1.0
    required_partial_weight: float = 0.5
    desirable_weight: float = 0.5
    desirable_partial_weight: float = 0.25
    partial_min_length: int = 3
    score_basis: ScoreBasis = "required"

    def __post_init__(self) -> None:
        weights = (
            self.required_weight,
            self.required_partial_weight,
            self.desirable_weight,
            self.desirable_partial_weight,
        )
        if any(weight < 0 for weight in weights):
            raise ValueError("Match weights must be non-negative")
        if self.required_partial_weight > self.required_weight:
            raise ValueError("required_partial_weight must not exceed required_weight")
        if self.desirable_partial_weight > self.desirable_weight:
            raise ValueError("desirable_partial_weight must not exceed desirable_weight")
        if self.partial_min_length < 1:
            raise ValueError("partial_min_length must be at least 1")
        if self.score_basis not in ("required", "combined"):
            raise ValueError(f"Unknown score_basis: {self.score_basis!r}")


@dataclass(frozen=True, slots=True)
class SkillMatch:
    """How one candidate skill satisfied one profile skill."""

    candidate_skill: Skill
    profile_skill: Skill
    match_type: MatchType
    requirement: Requirement = "required"
    weight: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "candidate_skill": self.candidate_skill.surface,
            "profile_skill": self.profile_skill.token,
            "match_type": self.match_type.value,
            "requirement": self.requirement,
            "weight": self.weight,
        }


@dataclass(frozen=True, slots=True)
class MatchScore:
    """Aggregate overlap between a candidate skill set and one profile."""

    value: float
    matched_required_count: int = 0
    matched_desirable_count: int = 0
    matches: tuple[SkillMatch, ...] = ()
    missing_required: tuple[Skill, ...] = ()
    missing_desirable: tuple[Skill, ...] = ()
    scoreable: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "value": self.value,
            "matched_required_count": self.matched_required_count,
            "matched_desirable_count": self.matched_desirable_count,
            "breakdown": [match.to_dict() for match in self.matches],
            "missing_required": [skill.token for skill in self.missing_required],
            "missing_desirable": [skill.token for skill in self.missing_desirable],
        }


@dataclass(slots=True)
class _Tally:
    weighted_sum: float = 0.0
    matched_required: int = 0
    matched_desirable: int = 0
    matches: list[SkillMatch] = field(default_factory=list)
    missing_required: list[Skill] = field(default_factory=list)
    missing_desirable: list[Skill] = field(default_factory=list)


class SkillMatcher:
    """Classify skill pairs and score candidate skills against a profile."""

    def __init__(self, *, config: SkillMatcherConfig | None = None) -> None:
        self._config = config or SkillMatcherConfig()

    @property
    def config(self) -> SkillMatcherConfig:
        return self._config

    def classify(self, candidate_skill: Skill, profile_skill: Skill) -> MatchType:
        if candidate_skill.token == profile_skill.token:
            if candidate_skill.surface == profile_skill.surface:
                return MatchType.EXACT
            return MatchType.SYNONYM

        shorter, longer = sorted((candidate_skill.token, profile_skill.token), key=len)
        if len(shorter) >= self._config.partial_min_length and shorter in longer:
            return MatchType.PARTIAL
        return MatchType.NONE

    def score(self, candidate_skills: Iterable[Skill], profile: CareerProfile) -> MatchScore:
        if not profile.scoreable:
            return MatchScore(value=0.0, scoreable=False)

        by_token: dict[str, list[Skill]] = {}
        for skill in candidate_skills:
            by_token.setdefault(skill.token, []).append(skill)
        ordered = [by_token[token][0] for token in sorted(by_token)]
        cfg = self._config
        tally = _Tally()

        groups: tuple[tuple[Requirement, tuple[Skill, ...], float, float], ...] = (
            ("required", profile.required_skills, cfg.required_weight, cfg.required_partial_weight),
            ("desirable", profile.desirable_skills, cfg.desirable_weight, cfg.desirable_partial_weight),
        )
        for requirement, skills, full_weight, partial_weight in groups:
            for profile_skill in skills:
                match = self._best_match(profile_skill, by_token, ordered)
                if match is None:
                    if requirement == "required":
                        tally.missing_required.append(profile_skill)
                    else:
                        tally.missing_desirable.append(profile_skill)
                    continue
                candidate_skill, match_type = match
                weight = partial_weight if match_type is MatchType.PARTIAL else full_weight
                tally.weighted_sum += weight
                tally.matches.append(
                    SkillMatch(
                        candidate_skill=candidate_skill,
                        profile_skill=profile_skill,
                        match_type=match_type,
                        requirement=requirement,
                        weight=weight,
                    )
                )
                if requirement == "required":
                    tally.matched_required += 1
                else:
                    tally.matched_desirable += 1

        max_sum = self._max_sum(profile)
        if max_sum <= 0:
            return MatchScore(value=0.0, scoreable=False)

        return MatchScore(
            value=min(max(tally.weighted_sum / max_sum, 0.0), 1.0),
            matched_required_count=tally.matched_required,
            matched_desirable_count=tally.matched_desirable,
            matches=tuple(tally.matches),
            missing_required=tuple(tally.missing_required),
            missing_desirable=tuple(tally.missing_desirable),
        )

    def _max_sum(self, profile: CareerProfile) -> float:
        required_max = len(profile.required_skills) * self._config.required_weight
        desirable_max = len(profile.desirable_skills) * self._config.desirable_weight
        if self._config.score_basis == "required" and required_max > 0:
            return required_max
        return required_max + desirable_max

    def _best_match(
        self,
        profile_skill: Skill,
        by_token: dict[str, list[Skill]],
        ordered: list[Skill],
    ) -> tuple[Skill, MatchType] | None:
        same = by_token.get(profile_skill.token)
        if same:
            # Any candidate spelled like the profile skill makes it exact.
            for candidate_skill in same:
                if candidate_skill.surface == profile_skill.surface:
                    return candidate_skill, MatchType.EXACT
            return same[0], self.classify(same[0], profile_skill)
        for candidate_skill in ordered:
            if self.classify(candidate_skill, profile_skill) is MatchType.PARTIAL:
                return candidate_skill, MatchType.PARTIAL
        return None


__all__ = [
    "MatchScore",
    "MatchType",
    "SkillMatch",
    "SkillMatcher",
    "SkillMatcherConfig",
]
