"""Output models shared by all normalizers."""

from .schema import (
    MAX_LINK_SIZE,
    NodeFormat,
    NormalizedDagNode,
    NormalizedLink,
    UnixFSData,
    UnixFSType,
)

__all__ = [
    "MAX_LINK_SIZE",
    "NodeFormat",
    "NormalizedDagNode",
    "NormalizedLink",
    "UnixFSData",
    "UnixFSType",
]
