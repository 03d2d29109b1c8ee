"""Error taxonomy of the trusted content service.

Every error the aggregator surfaces to a caller is one of the four kinds
below. The HTTP status for each kind lives in ``_STATUS_CODES`` and nowhere
else; the web layer and the CLI both render errors through ``status_code``
and ``to_dict()``.
"""

from __future__ import annotations

from typing import Any, Dict


class TrustApiError(Exception):
    """Base class for user-facing errors."""

    message = "Unknown error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.message
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return _STATUS_CODES[type(self)]

    def to_dict(self) -> Dict[str, Any]:
        """Response body carrying the numeric status and a readable message."""
        return {
            "status": self.status_code,
            "error": self.message,
        }


class MissingQueryArgument(TrustApiError):
    message = "No query argument was specified"


class PackageNotFound(TrustApiError):
    def __init__(self, purl: str) -> None:
        self.purl = purl
        super().__init__(f"Package {purl} was not found")


class InvalidPackageUrl(TrustApiError):
    def __init__(self, purl: str) -> None:
        self.purl = purl
        super().__init__(f"{purl} is not a valid package URL")


class InternalError(TrustApiError):
    # Upstream failure details are logged, never carried here.
    message = "Error processing error internally"


_STATUS_CODES: Dict[type, int] = {
    MissingQueryArgument: 400,
    PackageNotFound: 404,
    InvalidPackageUrl: 400,
    InternalError: 500,
}
