from __future__ import annotations

import logging
from typing import Sequence

from ..domain.models import Package
from ..ports.graph_port import DependencyGraphPort
from .upstream import upstream_call

logger = logging.getLogger(__name__)


class ListTrustedUseCase:
    """Return the graph inventory as-is; no vulnerability feed enrichment."""

    def __init__(self, graph: DependencyGraphPort) -> None:
        self._graph = graph

    def execute(self) -> Sequence[Package]:
        with upstream_call("guac"):
            packages = list(self._graph.get_all_packages())
        logger.info(f"Inventory holds {len(packages)} packages")
        return packages
