from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional
import operator


@dataclass
class RecordedEntry:
    name: str
    forward_args: Any
    reverse_args: Any
    series_key: Optional[str] = None
    children: List["RecordedEntry"] = field(default_factory=list)

    def child_names(self) -> List[str]:
        return [c.name for c in self.children]


@dataclass
class ActionSummary:
    name: str
    label: str
    done: bool


@dataclass
class Reducer:
    """
    Concrete reducer built from plain callables.

        Reducer(
            forward=lambda after: set_value(after),   # returns the old value
            reverse=lambda before: set_value(before),
            label=lambda entry: f"Set to {entry.forward_args}",
        )
    """
    forward: Callable[[Any], Any]
    reverse: Callable[[Any], None]
    label: Optional[Callable[[RecordedEntry], str]] = None
    suppress_duplicates: bool = False
    is_duplicate: Callable[[Any, Any], bool] = operator.eq

    def label_for(self, entry: RecordedEntry) -> str:
        if self.label is None:
            return entry.name
        return self.label(entry)

    def is_duplicate_of(self, a: Any, b: Any) -> bool:
        return bool(self.is_duplicate(a, b))

    @classmethod
    def from_mapping(cls, spec: Mapping[str, Any]) -> "Reducer":
        """Build from a dict with ``forward``/``reverse`` and optional extras."""
        missing = [k for k in ("forward", "reverse") if k not in spec]
        if missing:
            raise ValueError(f"Reducer mapping missing keys: {', '.join(missing)}")
        unknown = set(spec) - {"forward", "reverse", "label", "suppress_duplicates", "is_duplicate"}
        if unknown:
            raise ValueError(f"Unknown reducer keys: {', '.join(sorted(unknown))}")
        kwargs: Dict[str, Any] = dict(spec)
        if kwargs.get("is_duplicate") is None:
            kwargs.pop("is_duplicate", None)
        return cls(**kwargs)
