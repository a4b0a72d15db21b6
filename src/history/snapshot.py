# Snapshot <-> stack conversion.
from __future__ import annotations
from typing import Any, Dict, List, Tuple
import copy
import json

from .errors import IncompatibleSnapshot
from .model import RecordedEntry

SNAPSHOT_VERSION = "0"  # independent of the package version


def build_snapshot(stack: List[RecordedEntry], cursor: int) -> Dict[str, Any]:
    return {
        "version": SNAPSHOT_VERSION,
        "stack": [_entry_to_dict(e) for e in stack],
        "cursor": cursor,
    }


def restore_snapshot(snapshot: Any) -> Tuple[List[RecordedEntry], int]:
    """
    Validate a snapshot and rebuild (stack, cursor) from it.

    Snapshots written before the cursor was recorded restore with the cursor
    on the newest entry.
    """
    if not isinstance(snapshot, dict):
        raise IncompatibleSnapshot(f"Snapshot must be a mapping, got {type(snapshot).__name__}")
    version = snapshot.get("version")
    if version != SNAPSHOT_VERSION:
        raise IncompatibleSnapshot(
            f"Unsupported snapshot version: {version!r} (expected {SNAPSHOT_VERSION!r})"
        )
    raw_stack = snapshot.get("stack")
    if not isinstance(raw_stack, list):
        raise IncompatibleSnapshot("Snapshot 'stack' must be a list")
    stack = [_entry_from_dict(d, f"stack[{i}]") for i, d in enumerate(raw_stack)]

    cursor = snapshot.get("cursor", len(stack) - 1)
    if isinstance(cursor, bool) or not isinstance(cursor, int):
        raise IncompatibleSnapshot(f"Snapshot 'cursor' must be an integer, got {cursor!r}")
    if not -1 <= cursor <= len(stack) - 1:
        raise IncompatibleSnapshot(
            f"Snapshot cursor {cursor} out of range for a stack of {len(stack)}"
        )
    return stack, cursor


def dumps(snapshot: Dict[str, Any], pretty: bool = False) -> str:
    return json.dumps(snapshot, indent=2, ensure_ascii=False) if pretty else json.dumps(snapshot, separators=(",", ":"))


def loads(text: str) -> Dict[str, Any]:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise IncompatibleSnapshot(f"Snapshot is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise IncompatibleSnapshot("Snapshot JSON must be an object")
    return data


# ----- helpers -----

def _entry_to_dict(entry: RecordedEntry) -> Dict[str, Any]:
    out: Dict[str, Any] = {
        "name": entry.name,
        "forward_args": copy.deepcopy(entry.forward_args),
        "reverse_args": copy.deepcopy(entry.reverse_args),
    }
    if entry.series_key is not None:
        out["series_key"] = entry.series_key
    if entry.children:
        out["children"] = [_entry_to_dict(c) for c in entry.children]
    return out


def _entry_from_dict(data: Any, where: str) -> RecordedEntry:
    if not isinstance(data, dict):
        raise IncompatibleSnapshot(f"{where}: entry must be a mapping")
    name = data.get("name")
    if not isinstance(name, str) or not name:
        raise IncompatibleSnapshot(f"{where}: entry missing 'name'")
    series_key = data.get("series_key")
    if series_key is not None and not isinstance(series_key, str):
        raise IncompatibleSnapshot(f"{where}: 'series_key' must be a string")
    children = data.get("children") or []
    if not isinstance(children, list):
        raise IncompatibleSnapshot(f"{where}: 'children' must be a list")
    return RecordedEntry(
        name=name,
        forward_args=copy.deepcopy(data.get("forward_args")),
        reverse_args=copy.deepcopy(data.get("reverse_args")),
        series_key=series_key,
        children=[_entry_from_dict(c, f"{where}.children[{j}]") for j, c in enumerate(children)],
    )
