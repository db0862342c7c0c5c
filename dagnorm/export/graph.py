"""networkx view of a normalized node and its direct links."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict

import networkx as nx

from dagnorm.export.json import to_json_compatible
from dagnorm.models.schema import NormalizedDagNode

logger = logging.getLogger("dagnorm.export.graph")


def link_graph(node: NormalizedDagNode) -> nx.MultiDiGraph:
    """Build a star-shaped graph from ``node`` to each of its link targets.

    Edges carry ``path``, ``size`` and ``index``; parallel links to the same
    target become parallel edges. Links without a resolvable target are left
    out.
    """
    graph = nx.MultiDiGraph(cid=node.cid)

    attrs: Dict[str, Any] = {
        "type": to_json_compatible(node.type),
        "format": node.format.value,
        "root": True,
    }
    if node.size is not None:
        attrs["size"] = node.size
    graph.add_node(node.cid, **attrs)

    skipped = 0
    for link in node.links:
        if not link.target:
            skipped += 1
            continue
        if not graph.has_node(link.target):
            graph.add_node(link.target, root=False)
        graph.add_edge(
            node.cid,
            link.target,
            path=link.path,
            size=link.size,
            index=link.index,
        )

    if skipped:
        logger.debug("Left %d unresolved link(s) of %s out of the graph", skipped, node.cid)
    return graph


def export_node_link(node: NormalizedDagNode, output_path: Path) -> None:
    """Export the link graph of ``node`` in networkx node-link JSON format."""
    logger.info("Exporting link graph of %s: %s", node.cid, output_path)

    graph = link_graph(node)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    data = nx.readwrite.json_graph.node_link_data(graph, edges="edges")

    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)

    logger.info(
        "Link graph export completed: %d nodes, %d edges",
        graph.number_of_nodes(),
        graph.number_of_edges(),
    )
