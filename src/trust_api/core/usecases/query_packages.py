from __future__ import annotations

import logging
from typing import Sequence

from ..domain.errors import MissingQueryArgument, PackageNotFound, TrustApiError
from ..domain.models import Package
from .get_package import GetPackageUseCase

logger = logging.getLogger(__name__)


class QueryPackagesUseCase:
    """Best-effort batch lookup.

    Entries that fail for any reason are dropped. When nothing succeeds the
    error names the first requested purl, whatever made each entry fail.
    """

    def __init__(self, get_package: GetPackageUseCase) -> None:
        self._get_package = get_package

    def execute(self, purls: Sequence[str]) -> list[Package]:
        if not purls:
            raise MissingQueryArgument()

        packages: list[Package] = []
        for purl in purls:
            try:
                packages.append(self._get_package.execute(purl))
            except TrustApiError as e:
                logger.debug(f"Dropping {purl} from batch: {e.message}")
                continue

        logger.info(f"Batch lookup resolved {len(packages)}/{len(purls)} packages")
        if not packages:
            raise PackageNotFound(purl=purls[0])
        return packages
