from __future__ import annotations

import logging
from typing import Literal, Sequence

from ..domain.models import PackageDependencies
from ..ports.graph_port import DependencyGraphPort
from ..services.purl_validator import parse_purl
from .upstream import upstream_call

logger = logging.getLogger(__name__)

Direction = Literal["dependencies", "dependents"]


class QueryDependenciesUseCase:
    """One-hop dependency (or dependent) lookup for a list of purls.

    The first invalid purl aborts the whole batch; entries after it are never queried.
    """

    def __init__(self, graph: DependencyGraphPort, direction: Direction = "dependencies") -> None:
        if direction not in ("dependencies", "dependents"):
            raise ValueError(f"Unknown direction: {direction}")
        self._graph = graph
        self._direction = direction

    def execute(self, purls: Sequence[str]) -> list[PackageDependencies]:
        results: list[PackageDependencies] = []
        for purl in purls:
            canonical = parse_purl(purl).to_string()
            with upstream_call("guac", canonical):
                if self._direction == "dependencies":
                    record = self._graph.get_dependencies(canonical)
                else:
                    record = self._graph.get_dependents(canonical)
            results.append(record)
        logger.info(f"Resolved {self._direction} for {len(results)} packages")
        return results
