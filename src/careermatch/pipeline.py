"\"\"\"Recommendation pipeline assembly and execution.\"\"\""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pendulum
import structlog
from pydantic import ValidationError

from .adapters import DocumentStore, PackagedDocumentStore
from .core import CareerCatalog, Recommendation, RecommendationEngine, SkillNormalizer
from .errors import InvalidInputError
from .schemas import CandidateSkills
from . import __version__

DEFAULT_CATALOG = "careers.yaml"


def open_catalog(
    *,
    reference: str | None,
    store: DocumentStore,
    packaged_store: DocumentStore | None = None,
    normalizer: SkillNormalizer | None = None,
) -> CareerCatalog:
    """Fetch and parse the catalog; the bundled catalog is used when no reference is given."""
    logger = structlog.get_logger(__name__)
    if reference:
        payload = store.fetch_document_bytes(reference)
        source = reference
    else:
        payload = (packaged_store or PackagedDocumentStore()).fetch_document_bytes(DEFAULT_CATALOG)
        source = f"bundled:{DEFAULT_CATALOG}"
    catalog = CareerCatalog.from_bytes(payload, normalizer=normalizer)
    logger.info("catalog.loaded", source=source, size=len(catalog))
    return catalog


class CandidateLoadError(ValueError):
    """Raised when candidate loading encounters invalid records."""

    def __init__(self, errors: list[str], partial: list[CandidateSkills]):
        super().__init__("Candidate loading failed")
        self.errors = errors
        self.partial = partial

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"Candidate loading failed: {self.errors}"


class CandidateLoader:
    """Load candidate skill lists from a JSONL document."""

    def __init__(self, store: DocumentStore):
        self._store = store

    def load(self, reference: str | Path) -> list[CandidateSkills]:
        payload = self._store.fetch_document_bytes(str(reference))
        candidates: list[CandidateSkills] = []
        errors: list[str] = []
        for idx, line in enumerate(payload.decode("utf-8").splitlines(), start=1):
            raw = line.strip()
            if not raw:
                continue
            try:
                record = json.loads(raw)
            except json.JSONDecodeError as exc:
                errors.append(f"line {idx}: invalid JSON ({exc})")
                continue
            try:
                candidate = CandidateSkills.model_validate(record)
            except ValidationError as exc:
                errors.append(f"line {idx}: {exc.errors()[0]['msg']}")
                continue
            candidates.append(candidate)
        if errors:
            raise CandidateLoadError(errors, candidates)
        return candidates


class OutputWriter:
    """Persist recommendation results."""

    def write(self, path: Path, payload: dict | list[dict]) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps(payload, ensure_ascii=False, indent=2),
            encoding="utf-8",
        )


class AuditLogger:
    """Append-only audit logger writing JSON lines."""

    def __init__(self, path: Path):
        self._path = path
        self._path.parent.mkdir(parents=True, exist_ok=True)

    def append(self, record: dict) -> None:
        with self._path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(record, ensure_ascii=False))
            handle.write("\n")


class RecommendationPipeline:
    """Batch recommendation orchestrator."""

    def __init__(
        self,
        *,
        engine: RecommendationEngine,
        candidate_loader: CandidateLoader,
        writer: OutputWriter | None = None,
    ) -> None:
        self._engine = engine
        self._candidates = candidate_loader
        self._writer = writer or OutputWriter()
        self._logger = structlog.get_logger(__name__)

    def run(
        self,
        *,
        candidates_ref: str | Path,
        output_path: Path,
        limit: int | None = None,
        min_score: float | None = None,
        audit_logger: AuditLogger | None = None,
    ) -> list[dict[str, Any]]:
        options = self._engine.resolve_options(limit, min_score)
        errors: list[str] = []
        try:
            candidates = self._candidates.load(candidates_ref)
        except CandidateLoadError as exc:
            candidates = exc.partial
            errors.extend(exc.errors)
            self._logger.warning("candidates.partial_load", errors=exc.errors)

        results: list[dict[str, Any]] = []
        for candidate in candidates:
            try:
                recommendations = self._engine.recommend(
                    candidate.skills,
                    limit=options.limit,
                    min_score=options.min_score,
                )
            except InvalidInputError as exc:
                errors.append(f"candidate {candidate.candidate_id}: {exc}")
                self._logger.warning(
                    "pipeline.candidate_failed",
                    candidate_id=candidate.candidate_id,
                    error=str(exc),
                )
                continue

            entry = {
                "candidate_id": candidate.candidate_id,
                "recommendations": [rec.to_dict() for rec in recommendations],
            }
            results.append(entry)

            if audit_logger:
                audit_logger.append(_audit_record(candidate, recommendations))

            self._logger.info(
                "pipeline.candidate_scored",
                candidate_id=candidate.candidate_id,
                returned=len(recommendations),
                top=recommendations[0].career.id if recommendations else None,
            )

        metadata = {
            "catalog_size": len(self._engine.catalog),
            "candidate_count": len(candidates),
            "errors": errors,
            "timestamp": pendulum.now().to_iso8601_string(),
            "app_version": __version__,
        }
        self._writer.write(output_path, {"metadata": metadata, "results": results})
        return results


def _audit_record(candidate: CandidateSkills, recommendations: list[Recommendation]) -> dict[str, Any]:
    return {
        "candidate_id": candidate.candidate_id,
        "skills": candidate.skills,
        "recommended": [
            {"career_id": rec.career.id, "score": rec.score.value}
            for rec in recommendations
        ],
        "timestamp": pendulum.now().to_iso8601_string(),
    }
