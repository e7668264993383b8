"""
Adaptateur CLI (Typer + Rich) de Popcorn.

Les commandes sont definies dans commands.py et montees dans main.py.
"""

from popcorn.adapters.cli.commands import (
    bookmark,
    bookmarks,
    details,
    network,
    now_playing,
    search,
    trending,
)

__all__ = [
    "trending",
    "now_playing",
    "details",
    "search",
    "bookmark",
    "bookmarks",
    "network",
]
