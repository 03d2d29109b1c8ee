from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .enums import Severity


@dataclass(frozen=True)
class Vulnerability:
    id: str
    source: Optional[str] = None  # e.g., "guac", "snyk"

    summary: Optional[str] = None
    description: Optional[str] = None

    severity: Optional[Severity] = None
    cvss_score: Optional[float] = None
    cve_ids: tuple[str, ...] = field(default_factory=tuple)
    href: Optional[str] = None


@dataclass(frozen=True)
class PackageRef:
    purl: str
    href: str
    trusted: Optional[bool] = None
    sbom: Optional[str] = None


@dataclass(frozen=True)
class Package:
    purl: Optional[str] = None
    href: Optional[str] = None
    trusted: Optional[bool] = None
    trusted_versions: list[PackageRef] = field(default_factory=list)
    vulnerabilities: list[Vulnerability] = field(default_factory=list)
    sbom: Optional[str] = None

    @property
    def has_sbom(self) -> bool:
        return self.sbom is not None


@dataclass(frozen=True)
class PackageDependencies:
    """Direct dependencies (or dependents) of one package, one hop deep."""

    purl: str
    packages: list[str] = field(default_factory=list)
