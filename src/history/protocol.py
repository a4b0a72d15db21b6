from __future__ import annotations
from typing import Protocol, Any, TYPE_CHECKING

if TYPE_CHECKING:
    from .model import RecordedEntry


class ReducerProtocol(Protocol):
    """
    Uniform contract the engine uses to drive one action type.

    Implementations must provide:
      - forward(args) -> reverse_args   apply the action to external state
      - reverse(reverse_args) -> None   undo it with the captured data
      - label_for(entry) -> str         display label for a recorded entry
      - suppress_duplicates: bool
      - is_duplicate_of(a, b) -> bool   compare forward args of two actions

    Callbacks run synchronously and must not call back into the engine that
    invoked them.
    """
    suppress_duplicates: bool

    def forward(self, args: Any) -> Any: ...
    def reverse(self, reverse_args: Any) -> None: ...
    def label_for(self, entry: "RecordedEntry") -> str: ...
    def is_duplicate_of(self, a: Any, b: Any) -> bool: ...
