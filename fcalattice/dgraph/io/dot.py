"""Graphviz dot output for directed graphs."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, List, TextIO

if TYPE_CHECKING:
    from fcalattice.dgraph.directed_graph import DirectedGraph

logger = logging.getLogger(__name__)


def _label(value: Any) -> str:
    return str(value).replace('"', '\\"').replace("\n", "\\n")


def to_dot(graph: "DirectedGraph[Any, Any]") -> str:
    """
    Render ``graph`` in dot format, bottom-to-top.

    Nodes are declared by identifier and labelled with their content (the
    identifier when they have none). Edges are labelled only when they carry
    content.
    """
    lines: List[str] = ["digraph G {", "Graph [rankdir=BT]"]
    for node in graph.nodes:
        lines.append(f'{node.identifier} [label="{_label(node)}"]')
    for edge in graph.edges:
        line = f"{edge.source.identifier}->{edge.target.identifier}"
        if edge.has_content():
            line += f' [label="{_label(edge.content)}"]'
        lines.append(line)
    lines.append("}")
    return "\n".join(lines) + "\n"


def write_dot(graph: "DirectedGraph[Any, Any]", stream: TextIO) -> None:
    stream.write(to_dot(graph))


def save_dot(graph: "DirectedGraph[Any, Any]", path: str) -> None:
    with open(path, "w", encoding="utf-8") as stream:
        write_dot(graph, stream)
    logger.debug(
        "Saved graph with %d nodes and %d edges to %s",
        graph.number_of_nodes(),
        graph.number_of_edges(),
        path,
    )
