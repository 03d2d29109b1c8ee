from __future__ import annotations

import logging
from typing import Optional, Sequence

import httpx

from ..config.urls import get_snyk_issues_url, get_snyk_vuln_page_url
from ..core.domain.enums import Severity
from ..core.domain.models import Vulnerability
from ..core.ports.vulnerability_port import VulnerabilityFeedPort
from .http_client import HttpClient
from .schemas import SnykIssue, SnykIssuesResponse

logger = logging.getLogger(__name__)


class SnykConfigurationError(RuntimeError):
    """Raised when a Snyk lookup is attempted without an org id or token."""


def _severity(issue: SnykIssue) -> tuple[Optional[Severity], Optional[float]]:
    attrs = issue.attributes
    severity: Optional[Severity] = None
    if attrs.effective_severity_level:
        severity = Severity.from_str(attrs.effective_severity_level)

    score: Optional[float] = None
    for s in attrs.severities:
        if score is None and s.score is not None:
            score = s.score
        if severity is None:
            for candidate in (s.level, s.vector):
                if candidate:
                    severity = Severity.from_str(candidate)
                    if severity is not None:
                        break
    if severity is None and score is not None:
        severity = Severity.from_score(score)
    return severity, score


def _to_domain(issue: SnykIssue) -> Vulnerability:
    attrs = issue.attributes
    issue_id = attrs.key or issue.id
    severity, score = _severity(issue)
    cve_ids = tuple(p.id for p in attrs.problems if (p.source or "").upper() == "CVE")
    return Vulnerability(
        id=issue_id,
        source="snyk",
        summary=attrs.title,
        description=attrs.description,
        severity=severity,
        cvss_score=score,
        cve_ids=cve_ids,
        href=get_snyk_vuln_page_url(issue_id),
    )


class SnykAdapter(VulnerabilityFeedPort):
    def __init__(
        self,
        http_client: HttpClient,
        snyk_url: str,
        org_id: Optional[str],
        token: Optional[str],
        api_version: str,
    ) -> None:
        self._http = http_client
        self._snyk_url = snyk_url
        self._org_id = org_id
        self._token = token
        self._api_version = api_version

    def get_vulnerabilities(self, purl: str) -> Sequence[Vulnerability]:
        if not self._org_id or not self._token:
            raise SnykConfigurationError("Snyk organization id and token must both be configured")

        url = get_snyk_issues_url(self._snyk_url, self._org_id, purl)
        try:
            raw = self._http.get_json(url, params={"version": self._api_version})
        except httpx.HTTPStatusError as e:
            # Snyk answers 404 for packages it has never seen: no data, not a failure.
            if e.response.status_code == 404:
                logger.debug("Snyk has no record of %s", purl)
                return []
            raise

        issues = SnykIssuesResponse.model_validate(raw).data
        logger.debug("Snyk returned %d issues for %s", len(issues), purl)
        return [_to_domain(i) for i in issues]
