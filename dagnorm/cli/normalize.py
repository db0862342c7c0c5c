"""Normalize command implementation."""

import logging
from pathlib import Path

from pydantic import ValidationError

from dagnorm.block import normalize_block
from dagnorm.config import load_normalize_config
from dagnorm.errors import NormalizationError
from dagnorm.export import export_json, export_node_link, node_to_json
from dagnorm.models import NormalizedDagNode

logger = logging.getLogger("dagnorm.cli.normalize")


def load_normalized_node(args) -> NormalizedDagNode:
    """Read the block named by ``args.block`` and normalize it.

    Raises:
        OSError: If the block file cannot be read.
        NormalizationError: If the block cannot be decoded or normalized.
        ValidationError: If the configuration is invalid.
    """
    block_path = Path(args.block)
    config = load_normalize_config(getattr(args, "config", None))

    logger.info("Reading block: %s", block_path)
    raw = block_path.read_bytes()
    logger.info("Normalizing %d byte(s) as %s", len(raw), args.cid)
    return normalize_block(raw, args.cid, config=config)


def normalize_command(args) -> int:
    """Execute normalize command.

    Args:
        args: Parsed command-line arguments containing:
            - block: Path to the raw block file
            - cid: CID of the block
            - output: Output file path (optional, stdout when omitted)
            - format: Output format (json, node_link)
            - config: Configuration source (optional)

    Returns:
        int: Exit code (0 for success, non-zero for failure).
    """
    output_format = getattr(args, "format", "json")
    output = getattr(args, "output", None)

    try:
        node = load_normalized_node(args)

        if output_format == "node_link":
            if not output:
                logger.error("The node_link format requires --output")
                return 1
            export_node_link(node, Path(output))
        elif output:
            export_json(node, Path(output))
        else:
            print(node_to_json(node))

        logger.info("Normalized %s: format=%s, %d link(s)", node.cid, node.format.value, len(node.links))
        return 0

    except (NormalizationError, OSError, TypeError, ValueError, ValidationError) as err:
        logger.error("Normalize failed: %s", err)
        return 1
