"""Decode-and-normalize helpers for raw blocks."""

from __future__ import annotations

import logging
from typing import Any, Optional

from dagnorm.codecs.registry import CodecRegistry
from dagnorm.codecs.unixfs import UnixFSDecoder
from dagnorm.config.schema import NormalizeConfig
from dagnorm.errors import BlockDecodeError, UnsupportedCodecError
from dagnorm.identifiers import IdentifierResolver, get_resolver
from dagnorm.models.schema import NormalizedDagNode
from dagnorm.normalize.dispatch import normalize_dag_node

logger = logging.getLogger("dagnorm.block")

# Errors the codec libraries raise on malformed input.
_DECODE_ERRORS = (LookupError, TypeError, ValueError)


def decode_block(
    raw: bytes,
    cid_str: str,
    *,
    resolver: Optional[IdentifierResolver] = None,
    registry: Optional[CodecRegistry] = None,
) -> Any:
    """Decode block bytes with the codec named by ``cid_str``.

    Raises:
        UnsupportedCodecError: If the CID is unreadable or no decoder is
            registered for its codec.
        BlockDecodeError: If the decoder rejects the bytes.
    """
    resolver = get_resolver(resolver)
    registry = registry or CodecRegistry.get_instance()

    code = resolver.resolve_codec(cid_str)
    decoder = registry.get_decoder(code) if code is not None else None
    if decoder is None:
        raise UnsupportedCodecError(code, cid_str)

    logger.debug("Decoding %d byte(s) of %s as %s", len(raw), cid_str, registry.get_name(code))
    try:
        return decoder(raw)
    except BlockDecodeError:
        raise
    except _DECODE_ERRORS as exc:
        raise BlockDecodeError(f"Failed to decode {cid_str}: {exc}") from exc


def normalize_block(
    raw: bytes,
    cid_str: str,
    *,
    resolver: Optional[IdentifierResolver] = None,
    unixfs_decoder: Optional[UnixFSDecoder] = None,
    config: Optional[NormalizeConfig] = None,
    registry: Optional[CodecRegistry] = None,
) -> NormalizedDagNode:
    """Decode ``raw`` and normalize the resulting node in one step."""
    node = decode_block(raw, cid_str, resolver=resolver, registry=registry)
    return normalize_dag_node(
        node,
        cid_str,
        resolver=resolver,
        unixfs_decoder=unixfs_decoder,
        config=config,
    )


__all__ = ["decode_block", "normalize_block"]
