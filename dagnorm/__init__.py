"""dagnorm - uniform view over dag-pb, dag-cbor and other IPLD nodes."""

from dagnorm.block import decode_block, normalize_block
from dagnorm.config import NormalizeConfig, load_normalize_config
from dagnorm.errors import (
    BlockDecodeError,
    InvalidIdentifierError,
    NormalizationError,
    TraversalDepthError,
    UnsupportedCodecError,
)
from dagnorm.identifiers import IdentifierResolver, MultiformatsResolver
from dagnorm.models import (
    NodeFormat,
    NormalizedDagNode,
    NormalizedLink,
    UnixFSData,
    UnixFSType,
)
from dagnorm.normalize import (
    find_and_replace_dag_cbor_links,
    normalize_dag_cbor,
    normalize_dag_node,
    normalize_dag_pb,
    normalize_dag_pb_links,
)

__version__ = "0.1.0"

__all__ = [
    "BlockDecodeError",
    "IdentifierResolver",
    "InvalidIdentifierError",
    "MultiformatsResolver",
    "NodeFormat",
    "NormalizationError",
    "NormalizeConfig",
    "NormalizedDagNode",
    "NormalizedLink",
    "TraversalDepthError",
    "UnixFSData",
    "UnixFSType",
    "UnsupportedCodecError",
    "decode_block",
    "find_and_replace_dag_cbor_links",
    "load_normalize_config",
    "normalize_block",
    "normalize_dag_cbor",
    "normalize_dag_node",
    "normalize_dag_pb",
    "normalize_dag_pb_links",
]
