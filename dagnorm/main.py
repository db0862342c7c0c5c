"""Main CLI entry point for dagnorm.

Provides commands: normalize, links
"""

import argparse
import logging
import sys
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from dagnorm.cli.links import links_command
from dagnorm.cli.normalize import normalize_command
from dagnorm.codecs import CodecRegistry

logger = logging.getLogger("dagnorm.cli")


def setup_logging(verbose: bool = False, console: Optional[Console] = None) -> None:
    """Setup logging configuration with Rich integration.

    Args:
        verbose: Enable verbose logging.
        console: Rich Console instance for coordinated output (optional).
    """
    level = logging.DEBUG if verbose else logging.WARNING

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=True,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
        tracebacks_show_locals=verbose,
        log_time_format="[%H:%M:%S]",
    )

    logging.basicConfig(
        level=level,
        format="[%(name)s] [%(levelname)s] %(message)s",
        handlers=[handler],
    )


def _add_block_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "block",
        help="Path to a raw block file",
    )
    parser.add_argument(
        "--cid",
        required=True,
        help="CID of the block; its codec selects the decoder",
    )
    parser.add_argument(
        "-c",
        "--config",
        help=(
            "Optional normalization configuration. Can be a path to a TOML/JSON "
            "file or an inline TOML/JSON string. When omitted, built-in "
            "defaults are used."
        ),
    )


def main(argv: Optional[list[str]] = None) -> int:
    """Main CLI entry point.

    Returns:
        int: Exit code.
    """
    codecs = ", ".join(CodecRegistry.get_instance().list_codecs())
    parser = argparse.ArgumentParser(
        description=f"dagnorm - IPLD node normalizer (codecs: {codecs})",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    normalize_parser = subparsers.add_parser(
        "normalize",
        help="Decode a block and print or export its normalized form",
    )
    _add_block_arguments(normalize_parser)
    normalize_parser.add_argument(
        "-o",
        "--output",
        help="Output file (prints JSON to stdout when omitted)",
    )
    normalize_parser.add_argument(
        "-f",
        "--format",
        choices=["json", "node_link"],
        default="json",
        help="Output format (default: json, node_link writes a networkx link graph)",
    )

    links_parser = subparsers.add_parser(
        "links",
        help="List the links of a block",
    )
    _add_block_arguments(links_parser)

    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    if args.command == "normalize":
        return normalize_command(args)
    elif args.command == "links":
        return links_command(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
