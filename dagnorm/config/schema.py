"""Configuration schema for node normalization.

Pydantic validates values up front so a bad ``max_depth`` or codec code is
reported when the configuration is loaded, not halfway through a traversal.
"""

from pydantic import BaseModel, Field

from dagnorm.identifiers import DAG_CBOR_CODE

DEFAULT_MAX_DEPTH = 512


class NormalizeConfig(BaseModel):
    """Options shared by the dispatcher and the structural link finder.

    Attributes:
        max_depth: Maximum container nesting explored while looking for
            links inside tree-shaped nodes.
        strict_depth: Raise instead of skipping subtrees deeper than
            ``max_depth``.
        default_codec: Codec code reported for nodes whose CID cannot be
            resolved.
        unixfs_detection: Whether dag-pb payloads are probed for UnixFS
            metadata.
    """

    max_depth: int = Field(default=DEFAULT_MAX_DEPTH, ge=1)
    strict_depth: bool = False
    default_codec: int = Field(default=DAG_CBOR_CODE, ge=0)
    unixfs_detection: bool = True

    model_config = {"extra": "allow"}

    @classmethod
    def default(cls) -> "NormalizeConfig":
        return cls()
