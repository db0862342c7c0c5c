"""Exporters for normalized nodes."""

from .graph import export_node_link, link_graph
from .json import export_json, node_to_json, to_json_compatible

__all__ = [
    "export_json",
    "export_node_link",
    "link_graph",
    "node_to_json",
    "to_json_compatible",
]
