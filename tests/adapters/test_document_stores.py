from __future__ import annotations

from pathlib import Path

import pytest

from careermatch.adapters import DocumentStore, LocalDocumentStore, PackagedDocumentStore


def test_local_store_resolves_relative_references(tmp_path: Path):
    (tmp_path / "resumes").mkdir()
    (tmp_path / "resumes" / "cv.txt").write_bytes(b"python, sql")
    store = LocalDocumentStore(tmp_path)

    assert store.fetch_document_bytes("resumes/cv.txt") == b"python, sql"
    assert store.fetch_document_bytes(str(tmp_path / "resumes" / "cv.txt")) == b"python, sql"


def test_local_store_missing_document(tmp_path: Path):
    store = LocalDocumentStore(tmp_path)

    with pytest.raises(FileNotFoundError):
        store.fetch_document_bytes("nope.pdf")
    with pytest.raises(FileNotFoundError):
        store.fetch_document_bytes(".")


def test_packaged_store_serves_bundled_catalog():
    store = PackagedDocumentStore()

    payload = store.fetch_document_bytes("careers.yaml")

    assert b"careers:" in payload
    with pytest.raises(FileNotFoundError):
        store.fetch_document_bytes("missing.yaml")


def test_stores_satisfy_protocol(tmp_path: Path):
    assert isinstance(LocalDocumentStore(tmp_path), DocumentStore)
    assert isinstance(PackagedDocumentStore(), DocumentStore)
