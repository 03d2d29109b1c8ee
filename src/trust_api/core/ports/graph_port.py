from __future__ import annotations

from typing import Protocol, Sequence

from packageurl import PackageURL

from ..domain.models import Package, PackageDependencies, PackageRef, Vulnerability


class DependencyGraphPort(Protocol):
    def get_packages(self, purl: PackageURL) -> Sequence[PackageRef]:
        """Return the known versions of the package identified by purl (version ignored)."""
        ...

    def get_vulnerabilities(self, purl: str) -> Sequence[Vulnerability]:
        """Return vulnerabilities the graph has certified against purl."""
        ...

    def get_all_packages(self) -> Sequence[Package]:
        """Return the full inventory, already shaped as Package records."""
        ...

    def get_dependencies(self, purl: str) -> PackageDependencies:
        """Return the direct dependencies of purl."""
        ...

    def get_dependents(self, purl: str) -> PackageDependencies:
        """Return the packages that directly depend on purl."""
        ...
