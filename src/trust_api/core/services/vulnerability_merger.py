from __future__ import annotations

from typing import Sequence

from ..domain.models import Vulnerability


def merge_vulnerabilities(first: Sequence[Vulnerability], second: Sequence[Vulnerability]) -> list[Vulnerability]:
    """Concatenate two vulnerability lists, first source first.

    Order is part of the contract; entries are neither deduplicated nor sorted.
    """
    merged: list[Vulnerability] = list(first)
    merged.extend(second)
    return merged
