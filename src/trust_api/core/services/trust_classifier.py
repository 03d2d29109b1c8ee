from __future__ import annotations

from packageurl import PackageURL

from ..ports.trust_port import TrustPolicyPort


class RedHatTrustPolicy(TrustPolicyPort):
    """Provisional heuristic: Red Hat builds and the redhat namespace are trusted.

    Placeholder until a real policy engine exists; swap it via the container.
    """

    def is_trusted(self, purl: PackageURL) -> bool:
        if purl.namespace == "redhat":
            return True
        return purl.version is not None and "redhat" in purl.version


_DEFAULT_POLICY = RedHatTrustPolicy()


def is_trusted(purl: PackageURL) -> bool:
    return _DEFAULT_POLICY.is_trusted(purl)
