"""Exception hierarchy for dagnorm.

Only a handful of conditions are surfaced to callers. Malformed links and
payloads that are not UnixFS are absorbed by the normalizers and never show
up here.
"""


class NormalizationError(Exception):
    """Base class for errors raised while normalizing a node."""


class InvalidIdentifierError(NormalizationError, ValueError):
    """A node's own CID cannot be turned into its canonical string form.

    Every link of a dag-pb node carries the owning CID as ``source``, so no
    coherent output exists without it.
    """

    def __init__(self, cid: object) -> None:
        super().__init__(f"cidStr is null for cid: {cid}")
        self.cid = cid


class TraversalDepthError(NormalizationError):
    """Structural link discovery hit the configured nesting limit.

    Raised only when ``strict_depth`` is enabled; otherwise deep subtrees are
    skipped with a warning.
    """

    def __init__(self, path: str, max_depth: int) -> None:
        super().__init__(
            f"Nesting at {path or '<root>'!r} exceeds max_depth={max_depth}"
        )
        self.path = path
        self.max_depth = max_depth


class BlockDecodeError(NormalizationError):
    """Raw block bytes could not be decoded with the block's codec."""


class UnsupportedCodecError(BlockDecodeError):
    """No decoder is registered for the codec of a block's CID."""

    def __init__(self, codec: object, cid: str) -> None:
        super().__init__(f"No decoder registered for codec {codec!r} (cid: {cid})")
        self.codec = codec
        self.cid = cid
