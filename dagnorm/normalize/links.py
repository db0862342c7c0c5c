"""Shared helpers for assembling normalized links."""

from __future__ import annotations

from typing import Iterable

from dagnorm.models.schema import NormalizedLink


def default_link_path(index: int) -> str:
    """Path given to a dag-pb link that has no name."""
    return f"Links/{index}"


def join_path(path: str, segment: object) -> str:
    """Append ``segment`` to a slash-separated link path."""
    return f"{path}/{segment}" if path else f"{segment}"


def make_link(
    path: str, source: str, target: str, size: int = 0, index: int = 0
) -> NormalizedLink:
    return NormalizedLink(path=path, source=source, target=target, size=size, index=index)


def total_link_size(links: Iterable[NormalizedLink]) -> int:
    """Sum of the declared sizes of ``links`` (0 for no links)."""
    return sum(link.size for link in links)


__all__ = ["default_link_path", "join_path", "make_link", "total_link_size"]
