from __future__ import annotations

from typing import Protocol


class SbomRegistryPort(Protocol):
    def exists(self, purl: str) -> bool:
        """Return True if an SBOM document is registered for the canonical purl."""
        ...

    def lookup(self, purl: str) -> dict | None:
        """Return the SBOM document for the canonical purl, or None if missing."""
        ...
