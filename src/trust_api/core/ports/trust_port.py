from __future__ import annotations

from typing import Protocol

from packageurl import PackageURL


class TrustPolicyPort(Protocol):
    def is_trusted(self, purl: PackageURL) -> bool:
        """Return the trust verdict for a parsed package URL. Must not perform I/O."""
        ...
