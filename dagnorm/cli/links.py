"""Links command: print the links of a block as a table."""

import logging
from typing import Optional

from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from dagnorm.cli.normalize import load_normalized_node
from dagnorm.errors import NormalizationError
from dagnorm.models import NormalizedDagNode

logger = logging.getLogger("dagnorm.cli.links")


def build_links_table(node: NormalizedDagNode) -> Table:
    """Render the links of ``node`` as a rich table."""
    node_type = node.type.value if hasattr(node.type, "value") else node.type
    title = f"{node.cid} ({node.format.value}, type={node_type})"
    table = Table(title=title, show_lines=False)
    table.add_column("#", justify="right")
    table.add_column("Path")
    table.add_column("Target")
    table.add_column("Size", justify="right")

    for link in node.links:
        table.add_row(
            str(link.index),
            link.path,
            link.target or "[dim]<unresolved>[/dim]",
            str(link.size),
        )
    return table


def links_command(args, console: Optional[Console] = None) -> int:
    """Execute links command.

    Returns:
        int: Exit code (0 for success, non-zero for failure).
    """
    console = console or Console()
    try:
        node = load_normalized_node(args)
    except (NormalizationError, OSError, TypeError, ValueError, ValidationError) as err:
        logger.error("Links failed: %s", err)
        return 1

    console.print(build_links_table(node))
    if node.size is not None:
        console.print(f"Total size: {node.size}")
    return 0
