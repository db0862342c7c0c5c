"""JSON export for normalized nodes.

Values that JSON cannot represent directly follow the DAG-JSON conventions:
CIDs become ``{"/": "<cid>"}`` and bytes become ``{"/": {"bytes": "<b64>"}}``.
"""

from __future__ import annotations

import base64
import json
import logging
from collections.abc import Mapping
from enum import Enum
from pathlib import Path
from typing import Any, Dict

from multiformats import CID
from pydantic import BaseModel

from dagnorm.identifiers import DEFAULT_RESOLVER
from dagnorm.models.schema import NormalizedDagNode

logger = logging.getLogger("dagnorm.export.json")


def _encode_bytes(value: bytes) -> Dict[str, Any]:
    encoded = base64.b64encode(bytes(value)).decode("ascii").rstrip("=")
    return {"/": {"bytes": encoded}}


def to_json_compatible(value: Any) -> Any:
    """Convert a decoded node value into something ``json.dump`` accepts."""
    if isinstance(value, CID):
        return {"/": DEFAULT_RESOLVER.to_canonical_string(value)}
    if isinstance(value, (bytes, bytearray, memoryview)):
        return _encode_bytes(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, NormalizedDagNode):
        return to_json_compatible(value.to_dict())
    if isinstance(value, BaseModel):
        return to_json_compatible(value.model_dump(by_alias=True))
    if isinstance(value, Mapping):
        return {str(key): to_json_compatible(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_json_compatible(item) for item in value]
    return value


def node_to_json(node: NormalizedDagNode, *, indent: int | None = 2) -> str:
    """Serialize a normalized node to a JSON string."""
    return json.dumps(to_json_compatible(node), indent=indent, ensure_ascii=False)


def export_json(node: NormalizedDagNode, output_path: Path) -> None:
    """Export a normalized node to a JSON file.

    Args:
        node: Normalized node to export.
        output_path: Output file path.
    """
    logger.info("Exporting node %s to JSON: %s", node.cid, output_path)

    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w", encoding="utf-8") as f:
        f.write(node_to_json(node))

    logger.info("JSON export completed: %d link(s)", len(node.links))
