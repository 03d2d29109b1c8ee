from __future__ import annotations

from pathlib import Path
from typing import Sequence

from .container import Container
from ..config.settings import AppConfig
from ..core.domain.models import Package, PackageDependencies, PackageRef


class TrustedContentClient:
    """In-process client for trusted content lookups.

    The container and its collaborator handles are built once and reused
    across calls; errors are raised as ``TrustApiError`` subclasses.

    Example:
        with TrustedContentClient(guac_url="http://guac:8080", snyk_token="xxx") as client:
            pkg = client.get_package("pkg:maven/io.vertx/vertx-web@4.3.4.redhat-00007")
            print(pkg.trusted, len(pkg.vulnerabilities))
    """

    def __init__(
        self,
        *,
        guac_url: str | None = None,
        snyk_org_id: str | None = None,
        snyk_token: str | None = None,
        sbom_dir: str | Path | None = None,
        cache_dir: str | Path | None = None,
    ):
        """Initialize the client.

        Args:
            guac_url: Guac GraphQL base URL. If None, uses TRUST_API_GUAC_URL or the default.
            snyk_org_id: Snyk organization id. If None, uses TRUST_API_SNYK_ORG_ID.
            snyk_token: Snyk API token. If None, uses TRUST_API_SNYK_TOKEN.
            sbom_dir: Directory of SBOM documents ingested on startup.
            cache_dir: Directory backing the local SBOM registry.
        """
        self._container = Container()

        config_dict = {}
        if guac_url is not None:
            config_dict["guac_url"] = guac_url
        if snyk_org_id is not None:
            config_dict["snyk_org_id"] = snyk_org_id
        if snyk_token is not None:
            config_dict["snyk_token"] = snyk_token
        if sbom_dir is not None:
            config_dict["sbom_dir"] = Path(sbom_dir)
        if cache_dir is not None:
            config_dict["cache_dir"] = Path(cache_dir)

        if config_dict:
            self._container.config.from_pydantic(AppConfig(**config_dict))

        self._container.init_resources()

    def get_package(self, purl: str) -> Package:
        """Return the aggregated view of one package (vulnerabilities, versions, trust, SBOM link)."""
        return self._container.get_package_uc().execute(purl)

    def get_versions(self, purl: str) -> Sequence[PackageRef]:
        return self._container.get_versions_uc().execute(purl)

    def get_all_trusted(self) -> Sequence[Package]:
        return self._container.list_trusted_uc().execute()

    def get_batch(self, purls: Sequence[str]) -> list[Package]:
        """Best-effort lookup: failing entries are dropped, PackageNotFound if none succeed."""
        return self._container.query_packages_uc().execute(purls)

    def get_dependencies(self, purls: Sequence[str]) -> list[PackageDependencies]:
        return self._container.query_dependencies_uc().execute(purls)

    def get_dependents(self, purls: Sequence[str]) -> list[PackageDependencies]:
        return self._container.query_dependents_uc().execute(purls)

    def get_versions_batch(self, purls: Sequence[str]) -> Sequence[PackageRef]:
        """Versions of the last purl in the list; earlier entries are only validated and queried."""
        return self._container.query_versions_uc().execute(purls)

    def get_sbom(self, purl: str) -> dict:
        return self._container.fetch_sbom_uc().execute(purl)

    def close(self) -> None:
        self._container.shutdown_resources()

    def __enter__(self) -> TrustedContentClient:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


__all__ = [
    "TrustedContentClient",
    "AppConfig",
]
