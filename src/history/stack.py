"""
List-level helpers for the action stack.

Every helper takes the stack (a list of RecordedEntry) and mutates it in place;
the engine owns the list and the cursor and calls these in dispatch order:
truncate -> coalesce -> append -> cap.
"""
from __future__ import annotations
from typing import List, Optional

from .model import RecordedEntry


def truncate_redo(stack: List[RecordedEntry], cursor: int) -> int:
    """Drop entries above the cursor. Returns how many were discarded."""
    dropped = len(stack) - (cursor + 1)
    if dropped > 0:
        del stack[cursor + 1:]
        return dropped
    return 0


def find_series_head(stack: List[RecordedEntry], series_key: Optional[str]) -> Optional[RecordedEntry]:
    """First (oldest) entry tagged with series_key, if any."""
    if series_key is None:
        return None
    for entry in stack:
        if entry.series_key == series_key:
            return entry
    return None


def is_compatible(head: RecordedEntry, entry: RecordedEntry) -> bool:
    # child names are compared only when both sides carry children; arg shapes never are
    if head.name != entry.name:
        return False
    if not head.children or not entry.children:
        return True
    return head.child_names() == entry.child_names()


def coalesce_series(stack: List[RecordedEntry], entry: RecordedEntry) -> bool:
    """
    Fold `entry` into an existing series before it is appended.

    On a compatible match the entry (and each child) inherits the reverse args
    of the series head, and every entry sharing the key is removed from the
    stack. Returns True when a merge happened.
    """
    head = find_series_head(stack, entry.series_key)
    if head is None or not is_compatible(head, entry):
        return False

    entry.reverse_args = head.reverse_args
    for child, head_child in zip(entry.children, head.children):
        child.reverse_args = head_child.reverse_args

    stack[:] = [e for e in stack if e.series_key != entry.series_key]
    return True


def cap_length(stack: List[RecordedEntry], cursor: int, max_length: int) -> int:
    """Evict oldest entries beyond max_length. Returns the adjusted cursor."""
    overflow = len(stack) - max_length
    if overflow > 0:
        del stack[:overflow]
        cursor = max(cursor - overflow, -1)
    return cursor
