"""dag-pb block decoding into the IPLD data-model shape of ``PBNode``."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping

from google.protobuf.message import DecodeError
from multiformats import CID

from dagnorm.codecs.protos import PBNode
from dagnorm.errors import BlockDecodeError

logger = logging.getLogger("dagnorm.codecs.dag_pb")


def decode_dag_pb(raw: bytes) -> Dict[str, Any]:
    """Decode a dag-pb block.

    Returns:
        ``{"Data"?: bytes, "Links": [{"Hash": CID, "Name"?: str, "Tsize"?: int}]}``
        with optional keys present only when set in the block.

    Raises:
        BlockDecodeError: If the bytes are not a PBNode or a link hash is not
            a binary CID.
    """
    message = PBNode()
    try:
        message.ParseFromString(bytes(raw))
    except DecodeError as exc:
        raise BlockDecodeError(f"Invalid dag-pb block: {exc}") from exc

    links: List[Dict[str, Any]] = []
    for position, pb_link in enumerate(message.Links):
        try:
            target = CID.decode(pb_link.Hash)
        except (LookupError, TypeError, ValueError) as exc:
            raise BlockDecodeError(
                f"Invalid dag-pb block: link {position} has a malformed Hash ({exc})"
            ) from exc
        link: Dict[str, Any] = {"Hash": target}
        if pb_link.HasField("Name"):
            link["Name"] = pb_link.Name
        if pb_link.HasField("Tsize"):
            link["Tsize"] = pb_link.Tsize
        links.append(link)

    node: Dict[str, Any] = {"Links": links}
    if message.HasField("Data"):
        node["Data"] = message.Data
    logger.debug("Decoded dag-pb block with %d link(s)", len(links))
    return node


def encode_dag_pb(node: Mapping[str, Any]) -> bytes:
    """Serialize a ``PBNode``-shaped mapping back to dag-pb bytes."""
    message = PBNode()
    for entry in node.get("Links", ()):
        pb_link = message.Links.add()
        pb_link.Hash = bytes(entry["Hash"])
        if entry.get("Name") is not None:
            pb_link.Name = entry["Name"]
        if entry.get("Tsize") is not None:
            pb_link.Tsize = entry["Tsize"]
    if node.get("Data") is not None:
        message.Data = node["Data"]
    return message.SerializeToString()


__all__ = ["decode_dag_pb", "encode_dag_pb"]
