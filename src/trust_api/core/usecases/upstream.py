from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from ..domain.errors import InternalError, TrustApiError

logger = logging.getLogger(__name__)


@contextmanager
def upstream_call(source: str, purl: str | None = None) -> Iterator[None]:
    """Collapse any collaborator failure into InternalError.

    The upstream reason is logged and chained, never put in the error message.
    """
    try:
        yield
    except TrustApiError:
        raise
    except Exception as e:
        logger.warning("%s call failed for %s: %s: %s", source, purl or "<inventory>", type(e).__name__, e)
        raise InternalError() from e
