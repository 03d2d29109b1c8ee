from __future__ import annotations

import logging

from ..domain.models import Package
from ..ports.graph_port import DependencyGraphPort
from ..ports.sbom_port import SbomRegistryPort
from ..ports.trust_port import TrustPolicyPort
from ..ports.vulnerability_port import VulnerabilityFeedPort
from ..services.purl_validator import canonical_purl
from ..services.vulnerability_merger import merge_vulnerabilities
from .upstream import upstream_call
from ...config.urls import get_package_href, get_sbom_href

logger = logging.getLogger(__name__)


class GetPackageUseCase:
    def __init__(
        self,
        graph: DependencyGraphPort,
        feed: VulnerabilityFeedPort,
        sbom: SbomRegistryPort,
        trust: TrustPolicyPort,
    ) -> None:
        self._graph = graph
        self._feed = feed
        self._sbom = sbom
        self._trust = trust

    def execute(self, purl_str: str) -> Package:
        purl, canonical = canonical_purl(purl_str)
        logger.info(f"Looking up package {canonical}")

        # Sources are fetched one after another; any failure fails the lookup.
        with upstream_call("guac", canonical):
            graph_vulns = self._graph.get_vulnerabilities(canonical)
        with upstream_call("snyk", canonical):
            feed_vulns = self._feed.get_vulnerabilities(canonical)
        with upstream_call("guac", canonical):
            trusted_versions = list(self._graph.get_packages(purl))

        vulnerabilities = merge_vulnerabilities(graph_vulns, feed_vulns)
        logger.debug(
            f"{canonical}: {len(graph_vulns)} guac + {len(feed_vulns)} snyk vulnerabilities, "
            f"{len(trusted_versions)} related versions"
        )

        with upstream_call("sbom", canonical):
            has_sbom = self._sbom.exists(canonical)

        return Package(
            purl=canonical,
            href=get_package_href(canonical),
            trusted=self._trust.is_trusted(purl),
            trusted_versions=trusted_versions,
            vulnerabilities=vulnerabilities,
            sbom=get_sbom_href(canonical) if has_sbom else None,
        )
