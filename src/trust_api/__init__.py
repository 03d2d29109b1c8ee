"""trust_api package: app/core/infra/config.

Expose library-friendly API client and error types at the package level.
"""

from .app.api import AppConfig, TrustedContentClient
from .core.domain.errors import (
    InternalError,
    InvalidPackageUrl,
    MissingQueryArgument,
    PackageNotFound,
    TrustApiError,
)

import logging

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

__all__ = [
    "TrustedContentClient",
    "AppConfig",
    "TrustApiError",
    "MissingQueryArgument",
    "PackageNotFound",
    "InvalidPackageUrl",
    "InternalError",
]
