"""Test doubles and builders shared across the dagnorm test suite."""

from __future__ import annotations

from typing import Any, Dict, Optional

from multiformats import CID, multihash


class FakeResolver:
    """Deterministic resolver: any string starting with ``bafy`` is a CID.

    Codec codes are looked up in a fixed table so tests can pick the
    dispatch path without building real CIDs.
    """

    def __init__(self, codecs: Optional[Dict[str, int]] = None) -> None:
        self.codecs = dict(codecs or {})

    def resolve_codec(self, id_str: Any) -> Optional[int]:
        return self.codecs.get(id_str)

    def to_identifier(self, value: Any) -> Optional[str]:
        if isinstance(value, str) and value.startswith("bafy"):
            return value
        return None

    def to_canonical_string(self, raw: Any) -> Optional[str]:
        return self.to_identifier(raw)


def make_cid(
    data: bytes = b"dagnorm",
    codec: str = "dag-cbor",
    *,
    version: int = 1,
    base: str = "base32",
) -> CID:
    """Build a real CID over ``data`` using sha2-256."""
    return CID(base, version, codec, multihash.digest(data, "sha2-256"))
