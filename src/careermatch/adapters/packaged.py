"\"\"\"Documents bundled with the package.\"\"\""

from __future__ import annotations

from importlib import resources


class PackagedDocumentStore:
    """Serve read-only documents shipped inside a Python package."""

    def __init__(self, package: str = "careermatch.data"):
        self._package = package

    def fetch_document_bytes(self, reference: str) -> bytes:
        resource = resources.files(self._package).joinpath(reference)
        if not resource.is_file():
            raise FileNotFoundError(f"{self._package}:{reference}")
        return resource.read_bytes()
