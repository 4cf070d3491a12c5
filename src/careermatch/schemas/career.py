from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class CareerRecord(BaseModel):
    """Raw catalog entry as it appears in a catalog source document."""

    id: str = Field(min_length=1)
    title: str = Field(min_length=1)
    category: str = Field(min_length=1)
    required_skills: list[str] = Field(
        validation_alias=AliasChoices("requiredSkills", "required_skills"),
    )
    desirable_skills: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("desirableSkills", "desirable_skills"),
    )
    description: str | None = None
    seniority: str | None = None

    model_config = ConfigDict(extra="allow", str_strip_whitespace=True)
