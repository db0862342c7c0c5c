"""Link discovery for tree-shaped nodes (dag-cbor and friends).

Links in these encodings have no fixed position. They are found by walking
the decoded value and recognising two shapes:

* a value the resolver accepts as a CID on its own (a CID object, or a CID
  string from older encoders),
* a link marker: a mapping with the single key ``"/"`` whose value is a CID,
  a CID string or the CID bytes.

Markers are rewritten in place so that ``{"/": <whatever>}`` always ends up
as ``{"/": "<canonical cid string>"}``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, MutableMapping
from typing import Any, List, Optional, Tuple

from dagnorm.config.schema import DEFAULT_MAX_DEPTH, NormalizeConfig
from dagnorm.errors import TraversalDepthError
from dagnorm.identifiers import IdentifierResolver, get_resolver
from dagnorm.models.schema import NodeFormat, NormalizedDagNode, NormalizedLink
from dagnorm.normalize.links import join_path, make_link, total_link_size

logger = logging.getLogger("dagnorm.normalize.dag_cbor")

LINK_KEY = "/"

# Values that can neither be nor contain a link.
_SCALAR_TYPES = (bool, int, float, complex, bytes, bytearray, memoryview)


def is_link_marker(value: Any) -> bool:
    """True for a mapping with ``"/"`` as its only key and a non-None value."""
    return (
        isinstance(value, Mapping)
        and len(value) == 1
        and value.get(LINK_KEY) is not None
    )


def _resolve_target(resolver: IdentifierResolver, value: Any) -> Optional[str]:
    identifier = resolver.to_identifier(value)
    if identifier is None:
        return None
    return resolver.to_canonical_string(identifier)


def find_and_replace_dag_cbor_links(
    value: Any,
    source_cid: str,
    path: str = "",
    *,
    resolver: Optional[IdentifierResolver] = None,
    max_depth: int = DEFAULT_MAX_DEPTH,
    strict_depth: bool = False,
) -> List[NormalizedLink]:
    """Find every link in ``value`` and canonicalize link markers in place.

    The walk is pre-order: mapping values in key iteration order, sequence
    elements in index order. Paths are slash-joined keys and indices
    relative to ``path``. Links found this way have ``size=0`` and
    ``index=0``.

    Note that ``value`` is mutated: each resolvable ``{"/": ...}`` marker has
    its value replaced by the canonical CID string. Copy the value first if
    the original marker shape is needed afterwards.

    Markers and strings that do not resolve to a CID are skipped silently.

    Args:
        value: Decoded node value (or any sub-value of it).
        source_cid: CID string recorded as ``source`` on every link.
        path: Path of ``value`` inside the node.
        resolver: CID resolver; defaults to the multiformats resolver.
        max_depth: Deepest container nesting that is explored; ``value``
            itself is at depth 1.
        strict_depth: Raise instead of skipping containers past ``max_depth``.

    Returns:
        Links in discovery order.

    Raises:
        TraversalDepthError: Only when ``strict_depth`` is set and the value
            nests deeper than ``max_depth``.
    """
    resolver = get_resolver(resolver)
    links: List[NormalizedLink] = []
    stack: List[Tuple[Any, str, int]] = [(value, path, 1)]

    while stack:
        current, current_path, depth = stack.pop()

        if current is None or isinstance(current, _SCALAR_TYPES):
            continue

        if not isinstance(current, (Mapping, list, tuple)):
            # Strings and CID objects: a link only if they parse as a CID.
            target = _resolve_target(resolver, current)
            if target is not None:
                links.append(make_link(current_path, source_cid, target))
            continue

        if is_link_marker(current):
            target = _resolve_target(resolver, current[LINK_KEY])
            if target is None:
                logger.debug("Ignoring malformed link at %r in %s", current_path, source_cid)
                continue
            if isinstance(current, MutableMapping):
                current[LINK_KEY] = target
            links.append(make_link(current_path, source_cid, target))
            continue

        if depth > max_depth:
            if strict_depth:
                raise TraversalDepthError(current_path, max_depth)
            logger.warning(
                "Skipping %r in %s: nesting exceeds max_depth=%d",
                current_path or "<root>",
                source_cid,
                max_depth,
            )
            continue

        if isinstance(current, Mapping):
            children = [(child, join_path(current_path, key)) for key, child in current.items()]
        else:
            children = [(child, join_path(current_path, i)) for i, child in enumerate(current)]

        # Reversed so the first child is popped first.
        for child, child_path in reversed(children):
            stack.append((child, child_path, depth + 1))

    return links


def normalize_dag_cbor(
    data: Any,
    cid: str,
    codec: int,
    *,
    resolver: Optional[IdentifierResolver] = None,
    config: Optional[NormalizeConfig] = None,
) -> NormalizedDagNode:
    """Find links and add type and cid info.

    Args:
        data: Decoded node value; link markers inside it are rewritten.
        cid: CID string the node was requested with, kept as given.
        codec: Multicodec code, reported as ``type``.
        resolver: CID resolver; defaults to the multiformats resolver.
        config: Traversal limits; defaults to ``NormalizeConfig()``.

    Returns:
        Node with ``format=unknown`` and ``size`` equal to the summed link
        sizes.
    """
    config = config or NormalizeConfig.default()
    cid_str = cid if isinstance(cid, str) else str(cid)
    links = find_and_replace_dag_cbor_links(
        data,
        cid_str,
        resolver=resolver,
        max_depth=config.max_depth,
        strict_depth=config.strict_depth,
    )
    return NormalizedDagNode(
        cid=cid_str,
        type=codec,
        data=data,
        links=links,
        size=total_link_size(links),
        format=NodeFormat.UNKNOWN,
    )


__all__ = [
    "LINK_KEY",
    "find_and_replace_dag_cbor_links",
    "is_link_marker",
    "normalize_dag_cbor",
]
