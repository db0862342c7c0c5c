"""Normalized node and link models.

These models are the single output shape of the normalizers. Downstream
code reads ``NormalizedDagNode`` and never has to care whether the node was
stored as dag-pb, dag-cbor or anything else.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Dict, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

# Link sizes are unsigned 64-bit on the wire.
MAX_LINK_SIZE = 2**64 - 1


class NodeFormat(str, Enum):
    """Which normalizer produced a node."""

    UNIXFS = "unixfs"
    NON_UNIXFS = "non-unixfs"
    UNKNOWN = "unknown"


class UnixFSType(str, Enum):
    """UnixFS entry kinds."""

    RAW = "raw"
    DIRECTORY = "directory"
    FILE = "file"
    METADATA = "metadata"
    SYMLINK = "symlink"
    HAMT_SHARDED_DIRECTORY = "hamt-sharded-directory"

    @property
    def is_directory(self) -> bool:
        return self in (UnixFSType.DIRECTORY, UnixFSType.HAMT_SHARDED_DIRECTORY)


class UnixFSData(BaseModel):
    """Structured ``data`` of a dag-pb node whose payload is UnixFS."""

    model_config = ConfigDict(frozen=True)

    kind: Annotated[UnixFSType, Field(..., description="UnixFS entry kind")]
    payload: Annotated[
        Optional[bytes],
        Field(default=None, description="Inline file content, if any"),
    ]
    block_sizes: Annotated[
        Tuple[int, ...],
        Field(
            default_factory=tuple,
            serialization_alias="blockSizes",
            description="Sizes of the chunks the file is split into",
        ),
    ]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "payload": self.payload,
            "blockSizes": list(self.block_sizes),
        }


class NormalizedLink(BaseModel):
    """One outgoing edge of a normalized node."""

    model_config = ConfigDict(frozen=True)

    path: Annotated[str, Field(..., description="Location of the link inside its source node")]
    source: Annotated[str, Field(..., description="Canonical CID string of the owning node")]
    target: Annotated[
        str,
        Field(..., description="Canonical CID string of the linked node, '' if unresolvable"),
    ]
    size: Annotated[
        int,
        Field(default=0, ge=0, le=MAX_LINK_SIZE, description="Declared size of the linked subtree"),
    ]
    index: Annotated[int, Field(default=0, ge=0, description="Position among the node's links")]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": self.path,
            "source": self.source,
            "target": self.target,
            "size": self.size,
            "index": self.index,
        }


class NormalizedDagNode(BaseModel):
    """Uniform view over a decoded IPLD node.

    ``type`` is the multicodec code of the node, except for UnixFS nodes
    where it is the UnixFS entry kind. ``size`` is ``None`` for plain dag-pb
    nodes, which carry no size of their own.
    """

    model_config = ConfigDict(frozen=True)

    cid: Annotated[str, Field(..., description="CID string of the node itself")]
    type: Annotated[Union[UnixFSType, int], Field(..., description="Codec code or UnixFS kind")]
    data: Annotated[Any, Field(default=None, description="Payload of the node")]
    links: Annotated[Tuple[NormalizedLink, ...], Field(default_factory=tuple)]
    format: Annotated[NodeFormat, Field(..., description="Which normalizer produced the node")]
    size: Annotated[Optional[int], Field(default=None, ge=0)]

    @property
    def is_unixfs(self) -> bool:
        return self.format is NodeFormat.UNIXFS

    def to_dict(self) -> Dict[str, Any]:
        """Plain-dict view; ``data`` and ``size`` are omitted when unset."""
        payload: Dict[str, Any] = {
            "cid": self.cid,
            "type": self.type.value if isinstance(self.type, UnixFSType) else self.type,
        }
        if isinstance(self.data, UnixFSData):
            payload["data"] = self.data.to_dict()
        elif self.data is not None:
            payload["data"] = self.data
        payload["links"] = [link.to_dict() for link in self.links]
        payload["format"] = self.format.value
        if self.size is not None:
            payload["size"] = self.size
        return payload
