"\"\"\"Document storage adapters.\"\"\""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from .local import LocalDocumentStore
from .packaged import PackagedDocumentStore


@runtime_checkable
class DocumentStore(Protocol):
    """Read-only document storage contract.

    Implementations resolve an opaque reference (a relative path, a packaged
    resource name, ...) to the raw bytes of the stored document.
    """

    def fetch_document_bytes(self, reference: str) -> bytes:
        """Return the raw bytes stored under ``reference``."""


__all__ = ["DocumentStore", "LocalDocumentStore", "PackagedDocumentStore"]
