from __future__ import annotations

import logging

from packageurl import PackageURL

from ..domain.errors import InvalidPackageUrl

logger = logging.getLogger(__name__)


def parse_purl(value: str) -> PackageURL:
    """Parse a package URL string, raising InvalidPackageUrl carrying the input on failure."""
    try:
        return PackageURL.from_string(value)
    except (ValueError, TypeError) as e:
        logger.debug("Rejected package URL %r: %s", value, e)
        raise InvalidPackageUrl(purl=value) from e


def canonical_purl(value: str) -> tuple[PackageURL, str]:
    """Return the parsed identifier together with its canonical string form."""
    purl = parse_purl(value)
    return purl, purl.to_string()
