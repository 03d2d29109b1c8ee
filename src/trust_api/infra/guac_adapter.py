from __future__ import annotations

import logging
from typing import Any, Sequence

from packageurl import PackageURL

from ..config.urls import get_guac_graphql_url, get_osv_vuln_page_url, get_package_href, get_sbom_href
from ..core.domain.models import Package, PackageDependencies, PackageRef, Vulnerability
from ..core.ports.graph_port import DependencyGraphPort
from ..core.ports.sbom_port import SbomRegistryPort
from ..core.ports.trust_port import TrustPolicyPort
from ..core.services.purl_validator import parse_purl
from .http_client import HttpClient
from .schemas import GuacCertifyVuln, GuacIsDependency, GuacPackage, GuacResponse

logger = logging.getLogger(__name__)


_PKG_TREE = """
    type
    namespaces {
      namespace
      names {
        name
        versions {
          version
          qualifiers { key value }
          subpath
        }
      }
    }
"""

PACKAGES_QUERY = f"""
query Packages($filter: PkgSpec!) {{
  packages(pkgSpec: $filter) {{{_PKG_TREE}  }}
}}
"""

CERTIFY_VULN_QUERY = """
query CertifyVuln($filter: CertifyVulnSpec!) {
  CertifyVuln(certifyVulnSpec: $filter) {
    vulnerability {
      type
      vulnerabilityIDs { vulnerabilityID }
    }
    metadata { dbUri timeScanned }
  }
}
"""

IS_DEPENDENCY_QUERY = f"""
query IsDependency($filter: IsDependencySpec!) {{
  IsDependency(isDependencySpec: $filter) {{
    package {{{_PKG_TREE}    }}
    dependencyPackage {{{_PKG_TREE}    }}
  }}
}}
"""

# Placeholder entry Guac records when a scan found nothing.
_NO_VULN_TYPE = "novuln"


class GraphQueryError(RuntimeError):
    """Raised when Guac answers a query with a GraphQL errors array."""


def pkg_spec(purl: PackageURL, *, with_version: bool = True) -> dict[str, Any]:
    """Build a Guac PkgSpec filter from a parsed purl, leaving unset parts open."""
    spec: dict[str, Any] = {"type": purl.type, "name": purl.name}
    if purl.namespace:
        spec["namespace"] = purl.namespace
    if with_version:
        if purl.version:
            spec["version"] = purl.version
        if purl.qualifiers:
            spec["qualifiers"] = [{"key": k, "value": v} for k, v in sorted(purl.qualifiers.items())]
        if purl.subpath:
            spec["subpath"] = purl.subpath
    return spec


def flatten_purls(pkg: GuacPackage) -> list[str]:
    """Expand a Guac package trie into canonical purl strings (one per version, or per name if unversioned)."""
    purls: list[str] = []
    for ns in pkg.namespaces:
        for name in ns.names:
            if not name.versions:
                purls.append(PackageURL(type=pkg.type, namespace=ns.namespace or None, name=name.name).to_string())
                continue
            for ver in name.versions:
                purls.append(
                    PackageURL(
                        type=pkg.type,
                        namespace=ns.namespace or None,
                        name=name.name,
                        version=ver.version or None,
                        qualifiers={q.key: q.value for q in ver.qualifiers} or None,
                        subpath=ver.subpath or None,
                    ).to_string()
                )
    return purls


class GuacAdapter(DependencyGraphPort):
    def __init__(
        self,
        http_client: HttpClient,
        guac_url: str,
        trust: TrustPolicyPort,
        sbom: SbomRegistryPort,
    ) -> None:
        self._http = http_client
        self._url = get_guac_graphql_url(guac_url)
        self._trust = trust
        self._sbom = sbom

    def _query(self, query: str, filter: dict[str, Any], field: str) -> list[dict[str, Any]]:
        raw = self._http.post_json(self._url, {"query": query, "variables": {"filter": filter}})
        resp = GuacResponse.model_validate(raw)
        if resp.errors:
            raise GraphQueryError("; ".join(e.message for e in resp.errors))
        data = (resp.data or {}).get(field) or []
        logger.debug("Guac %s(%s) returned %d nodes", field, filter, len(data))
        return data

    def _package_ref(self, purl: str) -> PackageRef:
        return PackageRef(
            purl=purl,
            href=get_package_href(purl),
            trusted=self._trust.is_trusted(parse_purl(purl)),
            sbom=get_sbom_href(purl) if self._sbom.exists(purl) else None,
        )

    def get_packages(self, purl: PackageURL) -> Sequence[PackageRef]:
        nodes = self._query(PACKAGES_QUERY, pkg_spec(purl, with_version=False), "packages")
        refs: list[PackageRef] = []
        for node in nodes:
            for p in flatten_purls(GuacPackage.model_validate(node)):
                refs.append(self._package_ref(p))
        return refs

    def get_vulnerabilities(self, purl: str) -> Sequence[Vulnerability]:
        spec = pkg_spec(parse_purl(purl))
        nodes = self._query(CERTIFY_VULN_QUERY, {"package": spec}, "CertifyVuln")
        vulns: list[Vulnerability] = []
        for node in nodes:
            cert = GuacCertifyVuln.model_validate(node)
            if cert.vulnerability.type.lower() == _NO_VULN_TYPE:
                continue
            for vid in cert.vulnerability.vulnerability_ids:
                vuln_id = vid.vulnerability_id.upper()
                vulns.append(
                    Vulnerability(
                        id=vuln_id,
                        source="guac",
                        cve_ids=(vuln_id,) if vuln_id.startswith("CVE-") else (),
                        href=get_osv_vuln_page_url(vuln_id),
                    )
                )
        return vulns

    def get_all_packages(self) -> Sequence[Package]:
        nodes = self._query(PACKAGES_QUERY, {}, "packages")
        packages: list[Package] = []
        for node in nodes:
            for p in flatten_purls(GuacPackage.model_validate(node)):
                ref = self._package_ref(p)
                packages.append(Package(purl=ref.purl, href=ref.href, trusted=ref.trusted, sbom=ref.sbom))
        return packages

    def get_dependencies(self, purl: str) -> PackageDependencies:
        spec = pkg_spec(parse_purl(purl))
        nodes = self._query(IS_DEPENDENCY_QUERY, {"package": spec}, "IsDependency")
        packages: list[str] = []
        for node in nodes:
            dep = GuacIsDependency.model_validate(node)
            packages.extend(flatten_purls(dep.dependency_package))
        return PackageDependencies(purl=purl, packages=packages)

    def get_dependents(self, purl: str) -> PackageDependencies:
        spec = pkg_spec(parse_purl(purl))
        nodes = self._query(IS_DEPENDENCY_QUERY, {"dependencyPackage": spec}, "IsDependency")
        packages: list[str] = []
        for node in nodes:
            dep = GuacIsDependency.model_validate(node)
            packages.extend(flatten_purls(dep.package))
        return PackageDependencies(purl=purl, packages=packages)
