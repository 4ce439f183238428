"""
frontier.py — Frontier Base Class
=================================
The three searches share one loop and differ only in which entry leaves
the frontier next.  Each algorithm module subclasses Frontier and
overrides `pop`; everything else is common.
"""

from typing import List

from algorithms.step import FrontierEntry


class Frontier:
    """Ordered container of not-yet-processed entries."""

    def __init__(self):
        self._entries: List[FrontierEntry] = []

    def push(self, entry: FrontierEntry) -> None:
        self._entries.append(entry)

    def pop(self) -> FrontierEntry:
        raise NotImplementedError

    def snapshot(self) -> List[FrontierEntry]:
        """Current contents in frontier order (a copy)."""
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)
