"""tests/trust_api/conftest.py

In-memory collaborators implementing the core ports, plus an httpx mock
transport fixture for the infra adapters.
"""

from __future__ import annotations

import json
from typing import Sequence

import httpx
import pytest
from packageurl import PackageURL

from trust_api.config.urls import get_package_href
from trust_api.core.domain.models import Package, PackageDependencies, PackageRef, Vulnerability
from trust_api.core.ports.graph_port import DependencyGraphPort
from trust_api.core.ports.sbom_port import SbomRegistryPort
from trust_api.core.ports.vulnerability_port import VulnerabilityFeedPort


class FakeGraph(DependencyGraphPort):
    def __init__(
        self,
        vulns: dict[str, list[Vulnerability]] | None = None,
        versions: dict[str, list[PackageRef]] | None = None,
        inventory: list[Package] | None = None,
        dependencies: dict[str, list[str]] | None = None,
        dependents: dict[str, list[str]] | None = None,
        fail_on: set[str] | None = None,
    ) -> None:
        self.vulns = vulns or {}
        self.versions = versions or {}
        self.inventory = inventory or []
        self.dependencies = dependencies or {}
        self.dependents = dependents or {}
        self.fail_on = fail_on or set()
        self.calls: list[tuple[str, str]] = []

    def _check(self, op: str, purl: str) -> None:
        self.calls.append((op, purl))
        if purl in self.fail_on:
            raise RuntimeError(f"graph unavailable for {purl}")

    def get_packages(self, purl) -> Sequence[PackageRef]:
        # versions are keyed by the unversioned purl
        key = PackageURL(type=purl.type, namespace=purl.namespace, name=purl.name).to_string()
        self._check("get_packages", purl.to_string())
        return list(self.versions.get(key, []))

    def get_vulnerabilities(self, purl: str) -> Sequence[Vulnerability]:
        self._check("get_vulnerabilities", purl)
        return list(self.vulns.get(purl, []))

    def get_all_packages(self) -> Sequence[Package]:
        self._check("get_all_packages", "")
        return list(self.inventory)

    def get_dependencies(self, purl: str) -> PackageDependencies:
        self._check("get_dependencies", purl)
        return PackageDependencies(purl=purl, packages=list(self.dependencies.get(purl, [])))

    def get_dependents(self, purl: str) -> PackageDependencies:
        self._check("get_dependents", purl)
        return PackageDependencies(purl=purl, packages=list(self.dependents.get(purl, [])))


class FakeFeed(VulnerabilityFeedPort):
    def __init__(self, vulns: dict[str, list[Vulnerability]] | None = None, fail_on: set[str] | None = None) -> None:
        self.vulns = vulns or {}
        self.fail_on = fail_on or set()
        self.calls: list[str] = []

    def get_vulnerabilities(self, purl: str) -> Sequence[Vulnerability]:
        self.calls.append(purl)
        if purl in self.fail_on:
            raise RuntimeError(f"feed unavailable for {purl}")
        return list(self.vulns.get(purl, []))


class FakeSbomRegistry(SbomRegistryPort):
    def __init__(self, documents: dict[str, dict] | None = None) -> None:
        self.documents = documents or {}
        self.lookups: list[str] = []

    def exists(self, purl: str) -> bool:
        return purl in self.documents

    def lookup(self, purl: str) -> dict | None:
        self.lookups.append(purl)
        return self.documents.get(purl)


LODASH = "pkg:npm/lodash@4.17.21"
OPENSSL = "pkg:rpm/redhat/openssl@1.1.1k-7.el8_9"
VERTX = "pkg:maven/io.vertx/vertx-web@4.3.4.redhat-00007"
VERTX_UPSTREAM = "pkg:maven/io.vertx/vertx-web@4.3.4"


def ref(purl: str, trusted: bool | None = None) -> PackageRef:
    return PackageRef(purl=purl, href=get_package_href(purl), trusted=trusted)


@pytest.fixture
def graph() -> FakeGraph:
    return FakeGraph(
        vulns={
            LODASH: [Vulnerability(id="CVE-2021-23337", source="guac", cve_ids=("CVE-2021-23337",))],
            VERTX_UPSTREAM: [Vulnerability(id="GHSA-9ph3-v2vh-3qx7", source="guac")],
        },
        versions={
            "pkg:maven/io.vertx/vertx-web": [ref(VERTX, True), ref(VERTX_UPSTREAM, False)],
            "pkg:npm/lodash": [ref(LODASH, False)],
        },
        inventory=[Package(purl=VERTX, href=get_package_href(VERTX), trusted=True)],
        dependencies={VERTX: ["pkg:maven/io.vertx/vertx-core@4.3.4.redhat-00007"]},
        dependents={VERTX: ["pkg:maven/io.quarkus/quarkus-vertx-http@2.13.7.Final-redhat-00003"]},
    )


@pytest.fixture
def feed() -> FakeFeed:
    return FakeFeed(
        vulns={
            LODASH: [
                Vulnerability(id="SNYK-JS-LODASH-1040724", source="snyk"),
                Vulnerability(id="SNYK-JS-LODASH-1018905", source="snyk"),
            ],
        }
    )


@pytest.fixture
def sbom_registry() -> FakeSbomRegistry:
    return FakeSbomRegistry({VERTX: {"bomFormat": "CycloneDX", "specVersion": "1.4"}})


@pytest.fixture
def mock_transport():
    """
    Returns (register, calls, transport): register(method, url, status, payload)
    adds a canned JSON response; unregistered requests get a 404.
    """
    responses: dict[tuple[str, str], tuple[int, bytes]] = {}
    calls: list[httpx.Request] = []

    def register(method: str, url: str, status_code: int = 200, payload: object | None = None) -> None:
        body = json.dumps(payload).encode("utf-8") if payload is not None else b""
        responses[(method.upper(), url)] = (status_code, body)

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        # match on URL without the query string
        key = (request.method, str(request.url.copy_with(query=None)))
        if key in responses:
            status, body = responses[key]
            return httpx.Response(status, content=body, headers={"Content-Type": "application/json"})
        return httpx.Response(404, text=f"Mock URL not found: {request.method} {request.url}")

    return register, calls, httpx.MockTransport(handler)
