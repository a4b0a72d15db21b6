from __future__ import annotations
from dataclasses import dataclass, fields, asdict
from pathlib import Path
from typing import Any, Dict, Optional
import logging

import yaml

logger = logging.getLogger(__name__)


@dataclass
class HistoryConfig:
    max_history_length: int = 64
    forbid_overwrite_reducers: bool = False

    def __post_init__(self):
        if isinstance(self.max_history_length, bool) or not isinstance(self.max_history_length, int):
            raise ValueError(f"max_history_length must be an integer, got: {self.max_history_length!r}")
        if self.max_history_length < 1:
            raise ValueError("max_history_length must be at least 1")
        self.forbid_overwrite_reducers = bool(self.forbid_overwrite_reducers)

    def replace(self, **overrides: Any) -> "HistoryConfig":
        data = asdict(self)
        data.update({k: v for k, v in overrides.items() if v is not None})
        return HistoryConfig(**data)


DEFAULT_CONFIG: Dict[str, Any] = {
    "history": asdict(HistoryConfig()),
}


def load_config(path: Optional[str | Path]) -> HistoryConfig:
    """
    Read the ``history:`` section of a YAML file over the defaults.

        # history.yaml
        history:
          max_history_length: 200
          forbid_overwrite_reducers: true

    A missing path (or None) gives the defaults.
    """
    cfg = dict(DEFAULT_CONFIG["history"])
    if not path:
        return HistoryConfig(**cfg)
    p = Path(path)
    if not p.exists():
        logger.info("config not found: %s (using defaults)", p)
        return HistoryConfig(**cfg)
    with p.open("r", encoding="utf-8") as f:
        user = yaml.safe_load(f) or {}
    if not isinstance(user, dict):
        raise ValueError(f"{p}: expected a mapping at the top level")
    section = user.get("history") or {}
    if not isinstance(section, dict):
        raise ValueError(f"{p}: 'history' must be a mapping")
    known = {f.name for f in fields(HistoryConfig)}
    unknown = set(section) - known
    if unknown:
        raise ValueError(f"{p}: unknown history settings: {', '.join(sorted(unknown))}")
    # shallow merge is enough: every setting is a scalar
    cfg.update(section)
    return HistoryConfig(**cfg)
