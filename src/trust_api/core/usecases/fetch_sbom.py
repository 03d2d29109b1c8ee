from __future__ import annotations

from ..domain.errors import PackageNotFound
from ..ports.sbom_port import SbomRegistryPort
from ..services.purl_validator import canonical_purl
from .upstream import upstream_call


class FetchSbomUseCase:
    def __init__(self, sbom: SbomRegistryPort) -> None:
        self._sbom = sbom

    def execute(self, purl_str: str) -> dict:
        _, canonical = canonical_purl(purl_str)
        with upstream_call("sbom", canonical):
            document = self._sbom.lookup(canonical)
        if document is None:
            raise PackageNotFound(purl=purl_str)
        return document
