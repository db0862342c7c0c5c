"""CID resolution helpers.

The normalizers never parse CIDs themselves. They talk to an
``IdentifierResolver`` so callers can swap in their own CID handling; the
default implementation is backed by the ``multiformats`` package.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Protocol

from multiformats import CID

logger = logging.getLogger("dagnorm.identifiers")

# Multicodec codes, see https://github.com/multiformats/multicodec/blob/master/table.csv
RAW_CODE = 0x55
DAG_PB_CODE = 0x70
DAG_CBOR_CODE = 0x71
DAG_JSON_CODE = 0x0129
JSON_CODE = 0x0200

# Errors raised by multiformats/bases when a value is not a CID.
_CID_ERRORS = (LookupError, TypeError, ValueError)


class IdentifierResolver(Protocol):
    """Narrow interface the normalizers use to interpret CIDs."""

    def resolve_codec(self, id_str: Any) -> Optional[int]:
        """Return the multicodec code of a CID, or None if it cannot be parsed."""
        ...

    def to_canonical_string(self, raw: Any) -> Optional[str]:
        """Return the canonical string form of a CID-like value, or None."""
        ...

    def to_identifier(self, value: Any) -> Optional[Any]:
        """Interpret an arbitrary value as a CID, returning None on failure."""
        ...


class MultiformatsResolver:
    """IdentifierResolver backed by ``multiformats.CID``.

    Canonical strings follow the usual IPFS convention: CIDv0 stays in
    base58btc (``Qm...``), CIDv1 is rendered in base32 (``bafy...``).
    """

    def to_identifier(self, value: Any) -> Optional[CID]:
        if isinstance(value, CID):
            return value
        if not isinstance(value, (str, bytes, bytearray, memoryview)):
            return None
        try:
            return CID.decode(value)
        except _CID_ERRORS as exc:
            logger.debug("Value %r is not a CID: %s", value, exc)
            return None

    def resolve_codec(self, id_str: Any) -> Optional[int]:
        cid = self.to_identifier(id_str)
        if cid is None:
            return None
        return cid.codec.code

    def to_canonical_string(self, raw: Any) -> Optional[str]:
        cid = self.to_identifier(raw)
        if cid is None:
            return None
        if cid.version == 0:
            return str(cid)
        return cid.encode("base32")


DEFAULT_RESOLVER = MultiformatsResolver()


def get_resolver(resolver: Optional[IdentifierResolver] = None) -> IdentifierResolver:
    """Return ``resolver`` or the shared multiformats-backed default."""
    return resolver if resolver is not None else DEFAULT_RESOLVER


__all__ = [
    "DAG_CBOR_CODE",
    "DAG_JSON_CODE",
    "DAG_PB_CODE",
    "DEFAULT_RESOLVER",
    "IdentifierResolver",
    "JSON_CODE",
    "MultiformatsResolver",
    "RAW_CODE",
    "get_resolver",
]
