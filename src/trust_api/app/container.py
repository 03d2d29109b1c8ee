from __future__ import annotations

import logging

from dependency_injector import containers, providers

from ..config.settings import AppConfig
from ..core.services.trust_classifier import RedHatTrustPolicy
from ..core.usecases.fetch_sbom import FetchSbomUseCase
from ..core.usecases.get_package import GetPackageUseCase
from ..core.usecases.get_versions import GetVersionsUseCase
from ..core.usecases.list_trusted import ListTrustedUseCase
from ..core.usecases.query_dependencies import QueryDependenciesUseCase
from ..core.usecases.query_packages import QueryPackagesUseCase
from ..core.usecases.query_versions import QueryVersionsUseCase
from ..infra.cache_diskcache import DiskCacheAdapter
from ..infra.guac_adapter import GuacAdapter
from ..infra.http_client import HttpClient
from ..infra.sbom_registry import DiskCacheSbomRegistry
from ..infra.snyk_adapter import SnykAdapter

logger = logging.getLogger(__name__)


def cache_resource(cache_dir):
	cache_dir_str = str(cache_dir) if cache_dir else None
	logger.info(f"Initializing SBOM store at: {cache_dir_str or 'default user cache directory'}")
	with DiskCacheAdapter(namespace="sbom", base_dir=cache_dir_str) as cache:
		yield cache
	logger.debug("SBOM store closed")


def http_client_resource(timeout_seconds, token=None):
	"""HTTP client shared by every request; closed on container shutdown."""
	headers = {"Accept": "application/json"}
	if token:
		headers["Authorization"] = f"token {token}"
	client = HttpClient(base_headers=headers, timeout_seconds=timeout_seconds)
	try:
		yield client
	finally:
		client.close()


def sbom_registry_resource(cache, sbom_dir):
	registry = DiskCacheSbomRegistry(cache)
	if sbom_dir:
		registry.ingest_dir(sbom_dir)
	else:
		logger.info("No SBOM directory configured; serving previously ingested documents only")
	return registry


class Container(containers.DeclarativeContainer):
	config = providers.Configuration(pydantic_settings=[AppConfig()])

	cache = providers.Resource(cache_resource, cache_dir=config.cache_dir)

	guac_http = providers.Resource(
		http_client_resource,
		timeout_seconds=config.http_timeout_seconds,
	)

	# Carries the Snyk token; never shared with the Guac client.
	snyk_http = providers.Resource(
		http_client_resource,
		timeout_seconds=config.http_timeout_seconds,
		token=config.snyk_token,
	)

	trust_policy = providers.Singleton(RedHatTrustPolicy)

	sbom_registry = providers.Resource(sbom_registry_resource, cache=cache, sbom_dir=config.sbom_dir)

	graph = providers.Singleton(
		GuacAdapter,
		http_client=guac_http,
		guac_url=config.guac_url,
		trust=trust_policy,
		sbom=sbom_registry,
	)

	feed = providers.Singleton(
		SnykAdapter,
		http_client=snyk_http,
		snyk_url=config.snyk_url,
		org_id=config.snyk_org_id,
		token=config.snyk_token,
		api_version=config.snyk_api_version,
	)

	get_package_uc = providers.Factory(
		GetPackageUseCase, graph=graph, feed=feed, sbom=sbom_registry, trust=trust_policy
	)
	get_versions_uc = providers.Factory(GetVersionsUseCase, graph=graph)
	list_trusted_uc = providers.Factory(ListTrustedUseCase, graph=graph)
	query_packages_uc = providers.Factory(QueryPackagesUseCase, get_package=get_package_uc)
	query_dependencies_uc = providers.Factory(QueryDependenciesUseCase, graph=graph, direction="dependencies")
	query_dependents_uc = providers.Factory(QueryDependenciesUseCase, graph=graph, direction="dependents")
	query_versions_uc = providers.Factory(QueryVersionsUseCase, get_versions=get_versions_uc)
	fetch_sbom_uc = providers.Factory(FetchSbomUseCase, sbom=sbom_registry)
