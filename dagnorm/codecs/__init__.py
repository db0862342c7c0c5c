"""Block decoders and the UnixFS metadata decoder."""

from .dag_pb import decode_dag_pb, encode_dag_pb
from .registry import BlockDecoder, CodecRegistry
from .unixfs import UnixFSDecoder, UnixFSEntry, decode_unixfs, encode_unixfs

__all__ = [
    "BlockDecoder",
    "CodecRegistry",
    "UnixFSDecoder",
    "UnixFSEntry",
    "decode_dag_pb",
    "decode_unixfs",
    "encode_dag_pb",
    "encode_unixfs",
]
