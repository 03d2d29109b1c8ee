from __future__ import annotations

from typing import Protocol, Sequence

from ..domain.models import Vulnerability


class VulnerabilityFeedPort(Protocol):
    def get_vulnerabilities(self, purl: str) -> Sequence[Vulnerability]:
        """Return vulnerabilities known to the feed for purl.

        An empty sequence means "no data"; transport or parse failures raise.
        """
        ...
