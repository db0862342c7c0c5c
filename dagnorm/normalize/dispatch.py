"""Entry point that picks the right normalizer for a decoded node.

Spare the rest of the codebase from having to cope with all possible node
shapes: dag-pb nodes go through the link-list normalizer, everything else is
walked as a tree.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Optional

from dagnorm.codecs.unixfs import UnixFSDecoder
from dagnorm.config.schema import NormalizeConfig
from dagnorm.identifiers import DAG_PB_CODE, IdentifierResolver, get_resolver
from dagnorm.models.schema import NormalizedDagNode
from dagnorm.normalize.dag_cbor import normalize_dag_cbor
from dagnorm.normalize.dag_pb import normalize_dag_pb, pb_field

logger = logging.getLogger("dagnorm.normalize.dispatch")

_BYTES_TYPES = (bytes, bytearray, memoryview)


def is_dag_pb_node(node: Any) -> bool:
    """Whether ``node`` has the shape of a decoded PBNode.

    A PBNode carries a ``Links`` sequence and an optional bytes ``Data``.
    """
    if node is None or isinstance(node, (str, *_BYTES_TYPES)):
        return False
    if not isinstance(node, Mapping) and not hasattr(node, "Links"):
        return False
    links = pb_field(node, "Links")
    if not isinstance(links, (list, tuple)):
        return False
    data = pb_field(node, "Data")
    return data is None or isinstance(data, _BYTES_TYPES)


def normalize_dag_node(
    node: Any,
    cid_str: str,
    *,
    resolver: Optional[IdentifierResolver] = None,
    unixfs_decoder: Optional[UnixFSDecoder] = None,
    config: Optional[NormalizeConfig] = None,
) -> NormalizedDagNode:
    """Provide a uniform shape for a decoded node.

    Args:
        node: The decoded node value.
        cid_str: The CID string the node was requested with.
        resolver: CID resolver; defaults to the multiformats resolver.
        unixfs_decoder: UnixFS decoder used for dag-pb payloads.
        config: Normalization options; defaults to ``NormalizeConfig()``.

    Returns:
        The normalized node. Unknown codecs are walked as trees, never
        rejected.

    Raises:
        InvalidIdentifierError: For a dag-pb node whose CID cannot be
            canonicalized.
    """
    resolver = get_resolver(resolver)
    config = config or NormalizeConfig.default()
    code = resolver.resolve_codec(cid_str)

    if code == DAG_PB_CODE and is_dag_pb_node(node):
        return normalize_dag_pb(
            node,
            cid_str,
            DAG_PB_CODE,
            resolver=resolver,
            unixfs_decoder=unixfs_decoder,
            detect_unixfs=config.unixfs_detection,
        )

    if code is None:
        logger.debug(
            "Could not resolve codec of %r; assuming %#x", cid_str, config.default_codec
        )
        code = config.default_codec
    elif code == DAG_PB_CODE:
        logger.debug("Node %s is tagged dag-pb but is not PBNode-shaped", cid_str)

    # Try cbor style if we don't know any better.
    return normalize_dag_cbor(node, cid_str, code, resolver=resolver, config=config)


__all__ = ["is_dag_pb_node", "normalize_dag_node"]
