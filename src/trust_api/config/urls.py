from __future__ import annotations

from urllib.parse import quote


def encode_purl(purl: str) -> str:
	return quote(purl, safe="")


def get_package_href(purl: str) -> str:
	return f"/api/package?purl={encode_purl(purl)}"


def get_sbom_href(purl: str) -> str:
	return f"/api/package/sbom?purl={encode_purl(purl)}"


def get_guac_graphql_url(guac_url: str) -> str:
	return f"{guac_url.rstrip('/')}/query"


def get_snyk_issues_url(snyk_url: str, org_id: str, purl: str) -> str:
	return f"{snyk_url.rstrip('/')}/rest/orgs/{org_id}/packages/{encode_purl(purl)}/issues"


def get_osv_vuln_page_url(vuln_id: str) -> str:
	return f"https://osv.dev/vulnerability/{vuln_id}"


def get_snyk_vuln_page_url(issue_id: str) -> str:
	return f"https://security.snyk.io/vuln/{issue_id}"
