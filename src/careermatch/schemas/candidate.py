from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class CandidateSkills(BaseModel):
    """Per-request candidate skill list produced by an upstream parser."""

    candidate_id: str = Field(min_length=1)
    skills: list[str] = Field(default_factory=list)
    name: str | None = None

    model_config = ConfigDict(extra="allow")
