from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

from ..core.domain.errors import InvalidPackageUrl
from ..core.ports.cache_port import CachePort
from ..core.ports.sbom_port import SbomRegistryPort
from ..core.services.purl_validator import canonical_purl

logger = logging.getLogger(__name__)


_KEY_PREFIX = "sbom:"


def _key(purl: str) -> str:
    return f"{_KEY_PREFIX}{purl}"


def _as_dict(value: object) -> dict:
    return value if isinstance(value, dict) else {}


def _cyclonedx_purl(doc: dict) -> Optional[str]:
    component = _as_dict(_as_dict(doc.get("metadata")).get("component"))
    purl = component.get("purl")
    return purl if isinstance(purl, str) else None


def _spdx_purl(doc: dict) -> Optional[str]:
    described = doc.get("documentDescribes")
    described = set(d for d in described if isinstance(d, str)) if isinstance(described, list) else set()
    packages = doc.get("packages")
    packages = [p for p in packages if isinstance(p, dict)] if isinstance(packages, list) else []
    # Prefer the package the document describes, then any package carrying a purl.
    primary = [p for p in packages if isinstance(p.get("SPDXID"), str) and p["SPDXID"] in described]
    ordered = primary + [p for p in packages if p not in primary]
    for pkg in ordered:
        refs = pkg.get("externalRefs")
        if not isinstance(refs, list):
            continue
        for ref in refs:
            if not isinstance(ref, dict):
                continue
            if ref.get("referenceType") == "purl" and isinstance(ref.get("referenceLocator"), str):
                return ref["referenceLocator"]
    return None


def extract_purl(doc: dict) -> Optional[str]:
    """Return the purl of the main component of a CycloneDX or SPDX JSON document."""
    if doc.get("bomFormat") == "CycloneDX":
        return _cyclonedx_purl(doc)
    if "spdxVersion" in doc:
        return _spdx_purl(doc)
    return _cyclonedx_purl(doc) or _spdx_purl(doc)


class DiskCacheSbomRegistry(SbomRegistryPort):
    """SBOM registry backed by a CachePort, keyed by canonical purl."""

    def __init__(self, cache: CachePort) -> None:
        self._cache = cache

    def exists(self, purl: str) -> bool:
        return self._cache.contains(_key(purl))

    def lookup(self, purl: str) -> dict | None:
        return self._cache.get_json(_key(purl))

    def register(self, purl: str, document: dict) -> str:
        """Store document under the canonical form of purl and return that form."""
        _, canonical = canonical_purl(purl)
        self._cache.set_json(_key(canonical), document)
        return canonical

    def ingest_document(self, document: dict) -> Optional[str]:
        purl = extract_purl(document)
        if purl is None:
            return None
        return self.register(purl, document)

    def ingest_dir(self, path: str | Path) -> int:
        """Load every *.json SBOM under path. Files without a usable purl are skipped."""
        root = Path(path)
        if not root.is_dir():
            raise NotADirectoryError(f"SBOM directory not found: {root}")

        count = 0
        for file in sorted(root.rglob("*.json")):
            try:
                document = json.loads(file.read_text(encoding="utf-8"))
            except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
                logger.warning("Skipping unreadable SBOM %s: %s", file, e)
                continue
            if not isinstance(document, dict):
                logger.warning("Skipping %s: not a JSON object", file)
                continue
            try:
                purl = self.ingest_document(document)
            except InvalidPackageUrl as e:
                logger.warning("Skipping %s: %s", file, e.message)
                continue
            if purl is None:
                logger.warning("Skipping %s: no package URL found", file)
                continue
            logger.debug("Registered SBOM %s for %s", file.name, purl)
            count += 1
        logger.info("Ingested %d SBOM documents from %s", count, root)
        return count

    def clear(self) -> None:
        self._cache.clear(prefix=_KEY_PREFIX)
