from __future__ import annotations

from typing import Sequence

from ..domain.models import PackageRef
from ..ports.graph_port import DependencyGraphPort
from ..services.purl_validator import parse_purl
from .upstream import upstream_call


class GetVersionsUseCase:
    def __init__(self, graph: DependencyGraphPort) -> None:
        self._graph = graph

    def execute(self, purl_str: str) -> Sequence[PackageRef]:
        purl = parse_purl(purl_str)
        with upstream_call("guac", purl_str):
            return list(self._graph.get_packages(purl))
