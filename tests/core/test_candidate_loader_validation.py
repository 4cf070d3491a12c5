from __future__ import annotations

import json
from pathlib import Path

import pytest

from careermatch.adapters import LocalDocumentStore
from careermatch.core import CareerCatalog, RecommendationEngine
from careermatch.errors import CatalogLoadError, InvalidInputError
from careermatch.pipeline import CandidateLoadError, CandidateLoader, RecommendationPipeline, open_catalog


def test_candidate_loader_reads_jsonl(tmp_path: Path):
    loader = CandidateLoader(LocalDocumentStore(tmp_path))
    path = tmp_path / "candidates.jsonl"
    path.write_text(
        json.dumps({"candidate_id": "C-001", "skills": ["Python"]}) + "\n\n"
        + json.dumps({"candidate_id": "C-002", "skills": []}),
        encoding="utf-8",
    )

    candidates = loader.load("candidates.jsonl")

    assert [c.candidate_id for c in candidates] == ["C-001", "C-002"]
    assert candidates[0].skills == ["Python"]


def test_candidate_loader_raises_on_invalid_json(tmp_path: Path):
    loader = CandidateLoader(LocalDocumentStore(tmp_path))
    path = tmp_path / "candidates.jsonl"
    path.write_text('{"candidate_id": "C-001"}\n{invalid}', encoding="utf-8")

    with pytest.raises(CandidateLoadError) as exc:
        loader.load(path)
    assert "invalid JSON" in str(exc.value)


def test_candidate_loader_skips_invalid_and_reports(tmp_path: Path):
    loader = CandidateLoader(LocalDocumentStore(tmp_path))
    path = tmp_path / "candidates.jsonl"
    path.write_text(
        json.dumps({"candidate_id": "C-001", "skills": ["SQL"]})
        + "\n"
        + json.dumps({"skills": ["SQL"]}),
        encoding="utf-8",
    )

    with pytest.raises(CandidateLoadError) as exc:
        loader.load(path)
    error = exc.value
    assert error.errors[0].startswith("line 2")
    assert len(error.partial) == 1


def test_open_catalog_reads_through_store(tmp_path: Path):
    (tmp_path / "careers.json").write_text(
        json.dumps([{"id": "x", "title": "X", "category": "c", "requiredSkills": ["go"]}]),
        encoding="utf-8",
    )

    catalog = open_catalog(reference="careers.json", store=LocalDocumentStore(tmp_path))

    assert catalog.ids() == ["x"]


def test_open_catalog_surfaces_load_errors(tmp_path: Path):
    (tmp_path / "careers.yaml").write_text("- {id: x}\n", encoding="utf-8")

    with pytest.raises(CatalogLoadError):
        open_catalog(reference="careers.yaml", store=LocalDocumentStore(tmp_path))


def test_open_catalog_missing_file(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        open_catalog(reference="missing.yaml", store=LocalDocumentStore(tmp_path))


def test_pipeline_rejects_invalid_options_before_processing(tmp_path: Path):
    (tmp_path / "candidates.jsonl").write_text(
        json.dumps({"candidate_id": "C-001", "skills": ["go"]}),
        encoding="utf-8",
    )
    catalog = CareerCatalog.load([{"id": "x", "title": "X", "category": "c", "requiredSkills": ["go"]}])
    pipeline = RecommendationPipeline(
        engine=RecommendationEngine(catalog),
        candidate_loader=CandidateLoader(LocalDocumentStore(tmp_path)),
    )
    output_path = tmp_path / "results.json"

    with pytest.raises(InvalidInputError):
        pipeline.run(candidates_ref="candidates.jsonl", output_path=output_path, limit=0)
    assert not output_path.exists()
