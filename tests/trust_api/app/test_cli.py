from __future__ import annotations

import json
import logging
from contextlib import contextmanager

import pytest
from dependency_injector import providers
from typer.testing import CliRunner

from trust_api.app import cli
from trust_api.app.container import Container
from trust_api.infra.cache_diskcache import DiskCacheAdapter
from trust_api.infra.sbom_registry import DiskCacheSbomRegistry


runner = CliRunner()

VERTX = "pkg:maven/io.vertx/vertx-web@4.3.4.redhat-00007"


@pytest.fixture
def container(graph, feed, sbom_registry, monkeypatch):
    c = Container()
    c.graph.override(providers.Object(graph))
    c.feed.override(providers.Object(feed))
    c.sbom_registry.override(providers.Object(sbom_registry))

    @contextmanager
    def _provide():
        yield c

    monkeypatch.setattr(cli, "provide_container", _provide)
    return c


def test_help():
    result = runner.invoke(cli.app, ["--help"])
    assert result.exit_code == 0
    for command in ("serve", "package", "versions", "trusted", "sbom", "ingest"):
        assert command in result.output


def test_package_prints_json(container):
    result = runner.invoke(cli.app, ["package", "pkg:npm/lodash@4.17.21"])
    assert result.exit_code == 0, result.output
    body = json.loads(result.output)
    assert body["purl"] == "pkg:npm/lodash@4.17.21"
    assert len(body["vulnerabilities"]) == 3


def test_package_invalid_purl_exits_nonzero(container):
    result = runner.invoke(cli.app, ["package", "pkg:invalid"])
    assert result.exit_code == 1
    assert "Error 400: pkg:invalid is not a valid package URL" in result.output


def test_versions_last_purl_wins(container):
    result = runner.invoke(cli.app, ["versions", "pkg:npm/lodash@4.17.21", VERTX])
    assert result.exit_code == 0, result.output
    assert [r["purl"] for r in json.loads(result.output)] == [VERTX, "pkg:maven/io.vertx/vertx-web@4.3.4"]


def test_trusted(container):
    result = runner.invoke(cli.app, ["trusted"])
    assert result.exit_code == 0, result.output
    assert [p["purl"] for p in json.loads(result.output)] == [VERTX]


def test_sbom_not_found(container):
    result = runner.invoke(cli.app, ["sbom", "pkg:npm/lodash@4.17.21"])
    assert result.exit_code == 1
    assert "Error 404" in result.output


def test_ingest(container, tmp_path):
    sboms = tmp_path / "sboms"
    sboms.mkdir()
    doc = {"bomFormat": "CycloneDX", "metadata": {"component": {"purl": VERTX}}}
    (sboms / "vertx.json").write_text(json.dumps(doc), encoding="utf-8")

    with DiskCacheAdapter(namespace="sbom", base_dir=str(tmp_path / "cache")) as cache:
        registry = DiskCacheSbomRegistry(cache)
        container.sbom_registry.override(providers.Object(registry))

        result = runner.invoke(cli.app, ["ingest", str(sboms)])

        assert result.exit_code == 0, result.output
        assert "Ingested 1 SBOM documents" in result.output
        assert registry.lookup(VERTX) == doc


def test_log_level_option(container):
    logger = logging.getLogger("trust_api")
    handlers = list(logger.handlers)
    try:
        result = runner.invoke(cli.app, ["--log-level", "DEBUG", "trusted"])
        assert result.exit_code == 0
        assert logger.level == logging.DEBUG
        assert logger.propagate is False
    finally:
        logger.handlers = handlers
        logger.propagate = True
        logger.setLevel(logging.NOTSET)
