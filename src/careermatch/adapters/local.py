"\"\"\"Filesystem-backed document storage.\"\"\""

from __future__ import annotations

from pathlib import Path

import structlog


class LocalDocumentStore:
    """Read documents from disk, resolving relative references under a base directory."""

    def __init__(self, base_path: str | Path | None = None):
        self._base_path = Path(base_path) if base_path else Path.cwd()
        self._logger = structlog.get_logger(__name__)

    @property
    def base_path(self) -> Path:
        return self._base_path

    def resolve(self, reference: str | Path) -> Path:
        path = Path(reference)
        if not path.is_absolute():
            path = self._base_path / path
        return path

    def fetch_document_bytes(self, reference: str | Path) -> bytes:
        path = self.resolve(reference)
        if not path.is_file():
            raise FileNotFoundError(path)
        payload = path.read_bytes()
        self._logger.debug("storage.fetched", path=str(path), size=len(payload))
        return payload
