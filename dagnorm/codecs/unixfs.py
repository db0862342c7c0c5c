"""UnixFS metadata decoding for dag-pb payloads."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence, Tuple

from google.protobuf.message import DecodeError

from dagnorm.codecs.protos import UnixFSDataMessage
from dagnorm.models.schema import UnixFSType

logger = logging.getLogger("dagnorm.codecs.unixfs")

# Wire value of ``Data.Type`` -> entry kind.
_KINDS: Tuple[UnixFSType, ...] = (
    UnixFSType.RAW,
    UnixFSType.DIRECTORY,
    UnixFSType.FILE,
    UnixFSType.METADATA,
    UnixFSType.SYMLINK,
    UnixFSType.HAMT_SHARDED_DIRECTORY,
)


@dataclass(frozen=True)
class UnixFSEntry:
    """Decoded UnixFS ``Data`` message."""

    kind: UnixFSType
    payload: Optional[bytes] = None
    block_sizes: Tuple[int, ...] = field(default_factory=tuple)
    mode: Optional[int] = None
    mtime: Optional[Tuple[int, int]] = None

    @property
    def file_size(self) -> int:
        """Size of the file content this entry describes.

        Directories report 0. Otherwise this is the sum of the chunk sizes
        plus the inline payload, as computed by other UnixFS implementations.
        """
        if self.kind.is_directory:
            return 0
        total = sum(self.block_sizes)
        if self.payload is not None:
            total += len(self.payload)
        return total


UnixFSDecoder = Callable[[bytes], Optional[UnixFSEntry]]


def decode_unixfs(payload: bytes) -> Optional[UnixFSEntry]:
    """Decode ``payload`` as UnixFS metadata.

    Returns None when the bytes are not a UnixFS ``Data`` message. That is
    the normal outcome for dag-pb nodes that do not represent files, so it is
    not treated as an error.
    """
    if not isinstance(payload, (bytes, bytearray, memoryview)):
        return None

    message = UnixFSDataMessage()
    try:
        message.ParseFromString(bytes(payload))
    except DecodeError as exc:
        logger.debug("Payload is not UnixFS: %s", exc)
        return None

    # Parsing does not enforce required fields; a payload without Type is not UnixFS.
    if not message.IsInitialized():
        logger.debug("Payload is missing required UnixFS fields")
        return None

    if message.Type >= len(_KINDS):
        logger.debug("Unknown UnixFS type %d", message.Type)
        return None

    mtime = None
    if message.HasField("mtime"):
        mtime = (message.mtime.Seconds, message.mtime.FractionalNanoseconds)

    return UnixFSEntry(
        kind=_KINDS[message.Type],
        payload=message.Data if message.HasField("Data") else None,
        block_sizes=tuple(message.blocksizes),
        mode=message.mode if message.HasField("mode") else None,
        mtime=mtime,
    )


def encode_unixfs(
    kind: UnixFSType,
    payload: Optional[bytes] = None,
    block_sizes: Sequence[int] = (),
) -> bytes:
    """Serialize a UnixFS ``Data`` message (used to build fixtures and blocks)."""
    message = UnixFSDataMessage()
    message.Type = _KINDS.index(kind)
    if payload is not None:
        message.Data = payload
    message.blocksizes.extend(block_sizes)
    if kind is UnixFSType.FILE:
        message.filesize = sum(block_sizes) + len(payload or b"")
    return message.SerializeToString()


__all__ = ["UnixFSDecoder", "UnixFSEntry", "decode_unixfs", "encode_unixfs"]
