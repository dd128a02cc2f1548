from typing import TYPE_CHECKING

from networkx import DiGraph, generate_network_text

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Iterable

    from .task import TaskNode


class Topology:
    def __init__(self, *, digraph: DiGraph) -> None:
        self.digraph = digraph

    @classmethod
    def from_nodes(cls, nodes: "Iterable[TaskNode]") -> "Topology":
        digraph = DiGraph()

        for node in nodes:
            digraph.add_node(node.key)

            for dep in node.dependencies:
                digraph.add_edge(dep.parent, node.key, kind=dep.kind)

        return cls(digraph=digraph)

    @property
    def roots(self) -> list[str]:
        return [key for key, degree in self.digraph.in_degree() if degree == 0]

    def __str__(self) -> str:
        return "\n".join(generate_network_text(self.digraph, vertical_chains=True))
