"\"\"\"Immutable career catalog.\"\"\""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Iterable, Iterator, Mapping, Sequence

import yaml
from pydantic import ValidationError
from rapidfuzz import fuzz

from ..errors import CatalogLoadError, InvalidSkillError
from ..schemas import CareerRecord
from .skills import Skill, SkillNormalizer


@dataclass(frozen=True, slots=True)
class CareerProfile:
    """Career entry with normalized required and desirable skills."""

    id: str
    title: str
    category: str
    required_skills: tuple[Skill, ...]
    desirable_skills: tuple[Skill, ...] = ()
    description: str | None = None
    seniority: str | None = None

    @property
    def skills(self) -> tuple[Skill, ...]:
        return self.required_skills + self.desirable_skills

    @property
    def scoreable(self) -> bool:
        return bool(self.required_skills or self.desirable_skills)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "category": self.category,
            "required_skills": [skill.token for skill in self.required_skills],
            "desirable_skills": [skill.token for skill in self.desirable_skills],
            "description": self.description,
            "seniority": self.seniority,
        }


class CareerCatalog:
    """Read-only collection of career profiles in load order."""

    def __init__(self, profiles: Iterable[CareerProfile]) -> None:
        ordered = tuple(profiles)
        index: dict[str, CareerProfile] = {}
        for profile in ordered:
            if profile.id in index:
                raise CatalogLoadError([f"duplicate id '{profile.id}'"])
            index[profile.id] = profile
        self._profiles = ordered
        self._index: Mapping[str, CareerProfile] = MappingProxyType(index)

    @classmethod
    def load(
        cls,
        records: Iterable[Mapping[str, Any]],
        *,
        normalizer: SkillNormalizer | None = None,
    ) -> "CareerCatalog":
        """Build a catalog from raw records, normalizing every skill.

        All malformed entries are reported together through ``CatalogLoadError``.
        """
        normalizer = normalizer or SkillNormalizer()
        profiles: list[CareerProfile] = []
        errors: list[str] = []
        seen_ids: set[str] = set()

        if isinstance(records, (str, bytes)) or not isinstance(records, Iterable):
            raise CatalogLoadError(["catalog source must be a sequence of records"])

        for position, raw in enumerate(records, start=1):
            label = f"entry {position}"
            if not isinstance(raw, Mapping):
                errors.append(f"{label}: expected a mapping, got {type(raw).__name__}")
                continue
            try:
                record = CareerRecord.model_validate(dict(raw))
            except ValidationError as exc:
                details = "; ".join(
                    f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
                    for err in exc.errors()
                )
                errors.append(f"{label}: {details}")
                continue

            label = f"entry {position} ('{record.id}')"
            if record.id in seen_ids:
                errors.append(f"{label}: duplicate id")
                continue
            seen_ids.add(record.id)

            entry_errors: list[str] = []
            required = _normalize_group(normalizer, record.required_skills, "required", entry_errors)
            desirable = _normalize_group(normalizer, record.desirable_skills, "desirable", entry_errors)
            overlap = sorted(skill.token for skill in set(required) & set(desirable))
            if overlap:
                entry_errors.append(f"required and desirable skills overlap: {overlap}")
            if entry_errors:
                errors.extend(f"{label}: {message}" for message in entry_errors)
                continue

            profiles.append(
                CareerProfile(
                    id=record.id,
                    title=record.title,
                    category=record.category,
                    required_skills=required,
                    desirable_skills=desirable,
                    description=record.description,
                    seniority=record.seniority,
                )
            )

        if errors:
            raise CatalogLoadError(errors)
        return cls(profiles)

    @classmethod
    def from_bytes(
        cls,
        payload: bytes | str,
        *,
        normalizer: SkillNormalizer | None = None,
    ) -> "CareerCatalog":
        """Parse a YAML or JSON catalog document."""
        if isinstance(payload, bytes):
            try:
                payload = payload.decode("utf-8")
            except UnicodeDecodeError as exc:
                raise CatalogLoadError([f"catalog is not valid UTF-8: {exc}"]) from exc
        try:
            document = yaml.safe_load(payload)
        except yaml.YAMLError as exc:
            raise CatalogLoadError([f"catalog is not valid YAML/JSON: {exc}"]) from exc

        if isinstance(document, Mapping):
            document = document.get("careers")
        if not isinstance(document, list):
            raise CatalogLoadError(["catalog document must be a list or a mapping with a 'careers' list"])
        return cls.load(document, normalizer=normalizer)

    def all(self) -> tuple[CareerProfile, ...]:
        return self._profiles

    def by_id(self, career_id: str) -> CareerProfile | None:
        return self._index.get(career_id)

    def ids(self) -> list[str]:
        return list(self._index)

    def categories(self) -> list[str]:
        return sorted({profile.category for profile in self._profiles})

    def by_category(self, category: str) -> list[CareerProfile]:
        wanted = category.strip().lower()
        return [p for p in self._profiles if p.category.lower() == wanted]

    def by_seniority(self, seniority: str) -> list[CareerProfile]:
        wanted = seniority.strip().lower()
        return [p for p in self._profiles if p.seniority and p.seniority.lower() == wanted]

    def search(self, query: str, *, min_similarity: float = 80.0) -> list[CareerProfile]:
        """Return profiles whose title, category, skills or description match ``query``.

        Substring hits win outright; otherwise a fuzzy token-set ratio of at
        least ``min_similarity`` is required. An empty query matches everything.
        """
        needle = " ".join(query.lower().split())
        if not needle:
            return list(self._profiles)
        return [
            profile
            for profile in self._profiles
            if _matches_query(needle, _searchable_fields(profile), min_similarity)
        ]

    def __len__(self) -> int:
        return len(self._profiles)

    def __iter__(self) -> Iterator[CareerProfile]:
        return iter(self._profiles)

    def __contains__(self, career_id: object) -> bool:
        return career_id in self._index


def _normalize_group(
    normalizer: SkillNormalizer,
    raws: Sequence[str],
    group: str,
    errors: list[str],
) -> tuple[Skill, ...]:
    skills: list[Skill] = []
    for position, raw in enumerate(raws, start=1):
        try:
            skill = normalizer.normalize(raw)
        except InvalidSkillError as exc:
            errors.append(f"{group} skill {position}: {exc}")
            continue
        if skill not in skills:
            skills.append(skill)
    return tuple(skills)


def _searchable_fields(profile: CareerProfile) -> list[str]:
    fields = [profile.title.lower(), profile.category.lower()]
    fields.extend(skill.token for skill in profile.skills)
    if profile.description:
        fields.append(profile.description.lower())
    return fields


def _matches_query(needle: str, fields: Sequence[str], min_similarity: float) -> bool:
    for text in fields:
        if needle in text:
            return True
        if fuzz.token_set_ratio(needle, text) >= min_similarity:
            return True
    return False


__all__ = ["CareerCatalog", "CareerProfile"]
