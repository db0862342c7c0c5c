"""Normalization of dag-pb nodes.

dag-pb already carries an explicit, ordered link list, so the work here is
mostly reshaping: canonical CID strings, default paths for unnamed links,
and UnixFS detection on the payload.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Iterable, List, Optional

from dagnorm.codecs.unixfs import UnixFSDecoder, decode_unixfs
from dagnorm.errors import InvalidIdentifierError
from dagnorm.identifiers import DAG_PB_CODE, IdentifierResolver, get_resolver
from dagnorm.models.schema import (
    NodeFormat,
    NormalizedDagNode,
    NormalizedLink,
    UnixFSData,
)
from dagnorm.normalize.links import default_link_path, make_link

logger = logging.getLogger("dagnorm.normalize.dag_pb")


def pb_field(obj: Any, name: str) -> Any:
    """Read ``name`` from a PBNode/PBLink given as a mapping or an object."""
    if isinstance(obj, Mapping):
        return obj.get(name)
    return getattr(obj, name, None)


def normalize_dag_pb_links(
    links: Iterable[Any],
    source_cid: str,
    *,
    resolver: Optional[IdentifierResolver] = None,
) -> List[NormalizedLink]:
    """Convert dag-pb links into ``NormalizedLink`` objects.

    Order is kept exactly as encoded and ``index`` is the position in the
    list. A link whose ``Hash`` cannot be resolved gets ``target=""`` rather
    than failing the node.

    Args:
        links: ``PBLink`` entries (mappings or objects with ``Hash``, ``Name``
            and ``Tsize``).
        source_cid: Canonical CID string of the node owning the links.
        resolver: CID resolver; defaults to the multiformats resolver.

    Returns:
        List of normalized links, one per entry.
    """
    resolver = get_resolver(resolver)
    normalized: List[NormalizedLink] = []
    for index, link in enumerate(links):
        name = pb_field(link, "Name")
        target = resolver.to_canonical_string(pb_field(link, "Hash"))
        if target is None:
            logger.debug("Link %d of %s has an unresolvable Hash", index, source_cid)
        normalized.append(
            make_link(
                path=name if name else default_link_path(index),
                source=source_cid,
                target=target or "",
                size=pb_field(link, "Tsize") or 0,
                index=index,
            )
        )
    return normalized


def normalize_dag_pb(
    node: Any,
    cid: Any,
    codec: int = DAG_PB_CODE,
    *,
    resolver: Optional[IdentifierResolver] = None,
    unixfs_decoder: Optional[UnixFSDecoder] = None,
    detect_unixfs: bool = True,
) -> NormalizedDagNode:
    """Normalize links and add type info, plus UnixFS info where available.

    Args:
        node: Decoded ``PBNode`` (``Links`` and optional ``Data``).
        cid: CID the node was requested with. Used instead of any CID found
            inside the node.
        codec: Codec code reported as ``type`` for non-UnixFS nodes.
        resolver: CID resolver; defaults to the multiformats resolver.
        unixfs_decoder: Callable returning a ``UnixFSEntry`` or None;
            defaults to ``decode_unixfs``.
        detect_unixfs: Skip UnixFS probing entirely when False.

    Returns:
        The normalized node.

    Raises:
        InvalidIdentifierError: If ``cid`` has no canonical string form.
    """
    resolver = get_resolver(resolver)
    cid_str = resolver.to_canonical_string(cid)
    if cid_str is None:
        raise InvalidIdentifierError(cid)

    data = pb_field(node, "Data")
    links = normalize_dag_pb_links(pb_field(node, "Links") or (), cid_str, resolver=resolver)

    if data is not None and detect_unixfs:
        decoder = unixfs_decoder or decode_unixfs
        entry = decoder(data)
        if entry is not None:
            return NormalizedDagNode(
                cid=cid_str,
                type=entry.kind,
                data=UnixFSData(
                    kind=entry.kind,
                    payload=entry.payload,
                    block_sizes=tuple(entry.block_sizes),
                ),
                links=links,
                size=entry.file_size,
                format=NodeFormat.UNIXFS,
            )
        logger.debug("dag-pb node %s is not UnixFS", cid_str)

    return NormalizedDagNode(
        cid=cid_str,
        type=codec,
        data=data,
        links=links,
        format=NodeFormat.NON_UNIXFS,
    )


__all__ = ["normalize_dag_pb", "normalize_dag_pb_links", "pb_field"]
