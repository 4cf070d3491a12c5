"\"\"\"Pydantic configuration schema for CLI YAML input.\"\"\""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator


class RecommendSettings(BaseModel):
    limit: int = Field(default=5, gt=0)
    min_score: float = Field(default=0.0, ge=0.0, le=1.0)

    model_config = ConfigDict(extra="forbid")


class MatcherSettings(BaseModel):
    required_weight: float = Field(default=1.0, ge=0.0)
    required_partial_weight: float = Field(default=0.5, ge=0.0)
    desirable_weight: float = Field(default=0.5, ge=0.0)
    desirable_partial_weight: float = Field(default=0.25, ge=0.0)
    partial_min_length: int = Field(default=3, ge=1)
    score_basis: Literal["required", "combined"] = "required"

    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def _partial_not_above_full(self) -> "MatcherSettings":
        if self.required_partial_weight > self.required_weight:
            raise ValueError("required_partial_weight must not exceed required_weight")
        if self.desirable_partial_weight > self.desirable_weight:
            raise ValueError("desirable_partial_weight must not exceed desirable_weight")
        return self


class NormalizerSettings(BaseModel):
    aliases: dict[str, str] = Field(default_factory=dict)

    model_config = ConfigDict(extra="forbid")


class CatalogSettings(BaseModel):
    path: str | None = None
    search_min_similarity: float = Field(default=80.0, ge=0.0, le=100.0)

    model_config = ConfigDict(extra="forbid")


class StorageSettings(BaseModel):
    base_path: str | None = None

    model_config = ConfigDict(extra="forbid")


class AppConfig(BaseModel):
    recommend: RecommendSettings = Field(default_factory=RecommendSettings)
    matcher: MatcherSettings | None = None
    normalizer: NormalizerSettings | None = None
    catalog: CatalogSettings = Field(default_factory=CatalogSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)

    model_config = ConfigDict(extra="forbid")

    def to_settings(self) -> dict[str, Any]:
        settings: dict[str, Any] = {
            "recommend": self.recommend.model_dump(),
            "catalog": self.catalog.model_dump(),
            "storage": self.storage.model_dump(),
        }
        if self.matcher is not None:
            settings["matcher"] = self.matcher.model_dump()
        if self.normalizer is not None and self.normalizer.aliases:
            settings["normalizer"] = self.normalizer.model_dump()
        return settings


def load_config(raw: Any) -> AppConfig:
    if raw is None:
        return AppConfig()
    if not isinstance(raw, dict):
        raise ValidationError.from_exception_data(
            "AppConfig",
            [{"type": "dict_type", "loc": ("config",), "input": raw}],
        )
    return AppConfig.model_validate(raw)
