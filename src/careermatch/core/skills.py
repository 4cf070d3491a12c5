"\"\"\"Skill value type and canonicalization.\"\"\""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, Mapping

import structlog

from ..errors import InvalidSkillError

_WHITESPACE_RE = re.compile(r"\s+")

DEFAULT_ALIASES: Mapping[str, str] = MappingProxyType(
    {
        "js": "javascript",
        "ecmascript": "javascript",
        "ts": "typescript",
        "py": "python",
        "python3": "python",
        "golang": "go",
        "cpp": "c++",
        "c sharp": "c#",
        "react.js": "react",
        "reactjs": "react",
        "react js": "react",
        "vue.js": "vue",
        "vuejs": "vue",
        "angularjs": "angular",
        "nextjs": "next.js",
        "node": "node.js",
        "nodejs": "node.js",
        "node js": "node.js",
        "express.js": "express",
        "expressjs": "express",
        "postgres": "postgresql",
        "psql": "postgresql",
        "mongo": "mongodb",
        "k8s": "kubernetes",
        "amazon web services": "aws",
        "google cloud": "gcp",
        "google cloud platform": "gcp",
        "ms azure": "azure",
        "microsoft azure": "azure",
        "ml": "machine learning",
        "dl": "deep learning",
        "ai": "artificial intelligence",
        "nlp": "natural language processing",
        "sklearn": "scikit-learn",
        "scikit learn": "scikit-learn",
        "tf": "tensorflow",
        "ci/cd": "continuous integration",
        "ci": "continuous integration",
        "html5": "html",
        "css3": "css",
        "ux": "user experience",
        "ui": "user interface",
        "excel": "microsoft excel",
        "ms excel": "microsoft excel",
    }
)


def canonical_form(raw: Any) -> str:
    """Return the trimmed, lower-cased, whitespace-collapsed form of ``raw``.

    Raises ``InvalidSkillError`` for non-strings and blank strings.
    """
    if not isinstance(raw, str):
        raise InvalidSkillError(f"Skill must be a string, got {type(raw).__name__}")
    collapsed = _WHITESPACE_RE.sub(" ", raw.strip().lower())
    if not collapsed:
        raise InvalidSkillError("Skill is empty after trimming")
    return collapsed


@dataclass(frozen=True, slots=True)
class Skill:
    """Normalized skill token.

    Equality and hashing use ``token`` only; ``surface`` keeps the form the
    skill had before alias resolution.
    """

    token: str
    surface: str = field(default="", compare=False)

    def __post_init__(self) -> None:
        if not self.surface:
            object.__setattr__(self, "surface", self.token)

    @property
    def aliased(self) -> bool:
        return self.surface != self.token

    def __str__(self) -> str:
        return self.token


class SkillNormalizer:
    """Canonicalize raw skill strings into ``Skill`` tokens."""

    def __init__(self, aliases: Mapping[str, str] | None = None) -> None:
        table: dict[str, str] = dict(DEFAULT_ALIASES)
        for alias, target in (aliases or {}).items():
            try:
                table[canonical_form(alias)] = canonical_form(target)
            except InvalidSkillError as exc:
                raise ValueError(f"Invalid alias entry {alias!r} -> {target!r}: {exc}") from exc
        self._aliases: Mapping[str, str] = MappingProxyType(_resolve_chains(table))
        self._logger = structlog.get_logger(__name__)

    @property
    def aliases(self) -> Mapping[str, str]:
        return self._aliases

    def normalize(self, raw: Any) -> Skill:
        surface = canonical_form(raw)
        return Skill(token=self._aliases.get(surface, surface), surface=surface)

    def normalize_all(self, raws: Iterable[Any]) -> list[Skill]:
        """Normalize many raw skills, skipping invalid entries and duplicates.

        Duplicates keep the position of their first occurrence; when one of
        them was written in canonical form, that surface wins.
        """
        skills: list[Skill] = []
        positions: dict[str, int] = {}
        for index, raw in enumerate(raws):
            try:
                skill = self.normalize(raw)
            except InvalidSkillError as exc:
                self._logger.warning("normalizer.skipped", index=index, reason=str(exc))
                continue
            position = positions.get(skill.token)
            if position is None:
                positions[skill.token] = len(skills)
                skills.append(skill)
            elif skills[position].aliased and not skill.aliased:
                skills[position] = skill
        return skills


def _resolve_chains(table: Mapping[str, str]) -> dict[str, str]:
    """Point every alias straight at its final target.

    Identity entries are dropped; cycles raise ``ValueError``.
    """
    resolved: dict[str, str] = {}
    for alias, target in table.items():
        if alias == target:
            continue
        visited = {alias}
        while target in table and table[target] != target:
            if target in visited:
                raise ValueError(f"Alias cycle involving {alias!r}")
            visited.add(target)
            target = table[target]
        resolved[alias] = target
    return resolved


__all__ = ["DEFAULT_ALIASES", "Skill", "SkillNormalizer", "canonical_form"]
