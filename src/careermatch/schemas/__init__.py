"\"\"\"Pydantic schema definitions for catalog, candidate, and config documents.\"\"\""

from __future__ import annotations

from .candidate import CandidateSkills
from .career import CareerRecord
from .config import AppConfig, load_config

__all__ = [
    "AppConfig",
    "CandidateSkills",
    "CareerRecord",
    "load_config",
]
