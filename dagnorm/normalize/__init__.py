"""Normalizers turning decoded IPLD nodes into ``NormalizedDagNode``."""

from .dag_cbor import (
    LINK_KEY,
    find_and_replace_dag_cbor_links,
    is_link_marker,
    normalize_dag_cbor,
)
from .dag_pb import normalize_dag_pb, normalize_dag_pb_links
from .dispatch import is_dag_pb_node, normalize_dag_node
from .links import default_link_path, make_link, total_link_size

__all__ = [
    "LINK_KEY",
    "default_link_path",
    "find_and_replace_dag_cbor_links",
    "is_dag_pb_node",
    "is_link_marker",
    "make_link",
    "normalize_dag_cbor",
    "normalize_dag_node",
    "normalize_dag_pb",
    "normalize_dag_pb_links",
    "total_link_size",
]
