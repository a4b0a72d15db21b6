from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class Action:
    """A request to apply the reducer registered under ``name``.

    ``series_key`` tags actions that belong to one logical edit (e.g. a slider
    being dragged); consecutive actions sharing it collapse into one entry.
    """
    name: str
    args: Any = None
    series_key: Optional[str] = None
