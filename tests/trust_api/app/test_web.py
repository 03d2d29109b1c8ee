from __future__ import annotations

import pytest
from dependency_injector import providers
from fastapi.testclient import TestClient

from trust_api.app.container import Container
from trust_api.app.web import create_app


LODASH = "pkg:npm/lodash@4.17.21"
VERTX = "pkg:maven/io.vertx/vertx-web@4.3.4.redhat-00007"


@pytest.fixture
def container(graph, feed, sbom_registry):
    c = Container()
    c.graph.override(providers.Object(graph))
    c.feed.override(providers.Object(feed))
    c.sbom_registry.override(providers.Object(sbom_registry))
    yield c
    c.unwire()


@pytest.fixture
def client(container):
    return TestClient(create_app(container))


def test_get_package(client):
    resp = client.get("/api/package", params={"purl": LODASH})
    assert resp.status_code == 200
    body = resp.json()
    assert body["purl"] == LODASH
    assert body["href"] == "/api/package?purl=pkg%3Anpm%2Flodash%404.17.21"
    assert body["trusted"] is False
    assert body["sbom"] is None
    assert [v["id"] for v in body["vulnerabilities"]] == [
        "CVE-2021-23337",
        "SNYK-JS-LODASH-1040724",
        "SNYK-JS-LODASH-1018905",
    ]
    assert body["vulnerabilities"][0]["cve_ids"] == ["CVE-2021-23337"]
    assert [r["purl"] for r in body["trusted_versions"]] == [LODASH]


def test_get_package_missing_purl(client):
    resp = client.get("/api/package")
    assert resp.status_code == 400
    assert resp.json() == {"status": 400, "error": "No query argument was specified"}


def test_get_package_invalid_purl(client, graph):
    resp = client.get("/api/package", params={"purl": "pkg:invalid"})
    assert resp.status_code == 400
    assert resp.json() == {"status": 400, "error": "pkg:invalid is not a valid package URL"}
    assert graph.calls == []


def test_upstream_failure_is_opaque_500(client, feed):
    feed.fail_on.add(LODASH)
    resp = client.get("/api/package", params={"purl": LODASH})
    assert resp.status_code == 500
    assert resp.json() == {"status": 500, "error": "Error processing error internally"}


def test_get_trusted(client):
    resp = client.get("/api/trusted")
    assert resp.status_code == 200
    assert [p["purl"] for p in resp.json()] == [VERTX]
    assert resp.json()[0]["trusted"] is True


def test_post_package_batch(client, graph):
    graph.fail_on.add(LODASH)
    resp = client.post("/api/package", json=[LODASH, VERTX])
    assert resp.status_code == 200
    assert [p["purl"] for p in resp.json()] == [VERTX]


def test_post_package_batch_all_failing(client):
    resp = client.post("/api/package", json=["pkg:invalid", "also-bad"])
    assert resp.status_code == 404
    assert resp.json() == {"status": 404, "error": "Package pkg:invalid was not found"}


def test_post_package_empty_batch(client):
    resp = client.post("/api/package", json=[])
    assert resp.status_code == 400
    assert resp.json()["error"] == "No query argument was specified"


def test_post_dependencies_and_dependents(client):
    resp = client.post("/api/package/dependencies", json=[VERTX])
    assert resp.status_code == 200
    assert resp.json() == [{"purl": VERTX, "packages": ["pkg:maven/io.vertx/vertx-core@4.3.4.redhat-00007"]}]

    resp = client.post("/api/package/dependents", json=[VERTX])
    assert resp.status_code == 200
    assert resp.json()[0]["packages"] == ["pkg:maven/io.quarkus/quarkus-vertx-http@2.13.7.Final-redhat-00003"]


def test_post_dependencies_invalid_purl(client):
    resp = client.post("/api/package/dependencies", json=[VERTX, "nope"])
    assert resp.status_code == 400
    assert resp.json()["error"] == "nope is not a valid package URL"


def test_post_versions_returns_last_entry_only(client):
    resp = client.post("/api/package/versions", json=[VERTX, LODASH])
    assert resp.status_code == 200
    assert [r["purl"] for r in resp.json()] == [LODASH]


def test_sbom(client):
    resp = client.get("/api/package/sbom", params={"purl": VERTX})
    assert resp.status_code == 200
    assert resp.json()["bomFormat"] == "CycloneDX"
    assert "content-disposition" not in resp.headers


def test_sbom_download(client):
    resp = client.get("/api/package/sbom", params={"purl": VERTX, "download": "true"})
    assert resp.status_code == 200
    assert resp.headers["content-disposition"] == 'attachment; filename="sbom.json"'


def test_sbom_not_found(client):
    resp = client.get("/api/package/sbom", params={"purl": LODASH})
    assert resp.status_code == 404
    assert resp.json() == {"status": 404, "error": f"Package {LODASH} was not found"}


def test_sbom_missing_purl(client):
    resp = client.get("/api/package/sbom")
    assert resp.status_code == 400


def test_cors_headers(client):
    resp = client.get("/api/trusted", headers={"Origin": "http://example.com"})
    assert resp.headers["access-control-allow-origin"] == "*"


def test_get_package_empty_purl_is_invalid_not_missing(client, graph):
    resp = client.get("/api/package", params={"purl": ""})
    assert resp.status_code == 400
    assert resp.json() == {"status": 400, "error": " is not a valid package URL"}
    assert graph.calls == []


def test_sbom_empty_purl_is_invalid_not_missing(client):
    resp = client.get("/api/package/sbom", params={"purl": ""})
    assert resp.status_code == 400
    assert resp.json()["error"] == " is not a valid package URL"


@pytest.mark.parametrize(
    "path", ["/api/package", "/api/package/dependencies", "/api/package/dependents", "/api/package/versions"]
)
@pytest.mark.parametrize("body", [{"purl": LODASH}, LODASH, [1, {"a": 2}]])
def test_malformed_body_uses_error_shape(client, path, body):
    resp = client.post(path, json=body)
    assert resp.status_code == 400
    payload = resp.json()
    assert set(payload) == {"status", "error"}
    assert payload["status"] == 400
    assert payload["error"].startswith("Invalid request:")
