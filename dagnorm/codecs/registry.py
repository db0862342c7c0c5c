"""Codec registry mapping multicodec codes to block decoders.

Each decoder turns raw block bytes into the value the normalizers expect:
dag-pb into a PBNode-shaped mapping, tree codecs into plain Python
containers.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict, List, Optional

import dag_cbor

from dagnorm.codecs.dag_pb import decode_dag_pb
from dagnorm.identifiers import (
    DAG_CBOR_CODE,
    DAG_JSON_CODE,
    DAG_PB_CODE,
    JSON_CODE,
    RAW_CODE,
)

logger = logging.getLogger("dagnorm.codecs.registry")

BlockDecoder = Callable[[bytes], Any]


def _decode_raw(raw: bytes) -> bytes:
    return bytes(raw)


def _decode_json(raw: bytes) -> Any:
    return json.loads(bytes(raw).decode("utf-8"))


def _decode_dag_cbor(raw: bytes) -> Any:
    return dag_cbor.decode(bytes(raw))


class CodecRegistry:
    """Global registry of block decoders keyed by multicodec code."""

    _instance: Optional["CodecRegistry"] = None

    def __init__(self) -> None:
        # code -> (name, decoder)
        self._decoders: Dict[int, tuple[str, BlockDecoder]] = {}

    @classmethod
    def get_instance(cls) -> "CodecRegistry":
        """Get the shared registry, pre-loaded with the built-in codecs."""
        if cls._instance is None:
            registry = cls()
            registry.register(DAG_PB_CODE, "dag-pb", decode_dag_pb)
            registry.register(DAG_CBOR_CODE, "dag-cbor", _decode_dag_cbor)
            registry.register(DAG_JSON_CODE, "dag-json", _decode_json)
            registry.register(JSON_CODE, "json", _decode_json)
            registry.register(RAW_CODE, "raw", _decode_raw)
            cls._instance = registry
        return cls._instance

    def register(self, code: int, name: str, decoder: BlockDecoder) -> None:
        """Register a decoder for a codec.

        Args:
            code: Multicodec code.
            name: Human-readable codec name.
            decoder: Callable turning block bytes into a node value.
        """
        if code in self._decoders:
            logger.warning(
                "Overwriting existing decoder for codec %#x: %s -> %s",
                code,
                self._decoders[code][0],
                name,
            )
        self._decoders[code] = (name, decoder)
        logger.debug("Registered decoder for codec %#x (%s)", code, name)

    def get_decoder(self, code: int) -> Optional[BlockDecoder]:
        entry = self._decoders.get(code)
        return entry[1] if entry else None

    def get_name(self, code: int) -> Optional[str]:
        entry = self._decoders.get(code)
        return entry[0] if entry else None

    def list_codecs(self) -> List[str]:
        """Names of all registered codecs, ordered by code."""
        return [self._decoders[code][0] for code in sorted(self._decoders)]


__all__ = ["BlockDecoder", "CodecRegistry"]
