from __future__ import annotations
from typing import Any, Dict, Iterable, List, Mapping, Optional
import logging

from .errors import DuplicateReducer, UnknownAction
from .model import Reducer
from .protocol import ReducerProtocol

logger = logging.getLogger(__name__)


class ReducerRegistry:
    """
    Name -> reducer table consulted by the engine.

      - register() overwrites silently unless forbid_overwrite is set
      - lookup() raises UnknownAction for unregistered names
      - dict-shaped specs are promoted to Reducer instances
    """

    def __init__(self, forbid_overwrite: bool = False, reducers: Optional[Mapping[str, Any]] = None):
        self.forbid_overwrite = forbid_overwrite
        self._reducers: Dict[str, ReducerProtocol] = {}
        if reducers:
            for name, reducer in reducers.items():
                self.register(name, reducer)

    def register(self, name: str, reducer: Any) -> ReducerProtocol:
        if not name:
            raise ValueError("Reducer name must be a non-empty string.")
        reducer = _coerce(name, reducer)
        if name in self._reducers:
            if self.forbid_overwrite:
                raise DuplicateReducer(name)
            logger.warning("Overwriting reducer for action: %s", name)
        self._reducers[name] = reducer
        return reducer

    def lookup(self, name: str) -> ReducerProtocol:
        try:
            return self._reducers[name]
        except KeyError:
            raise UnknownAction(name) from None

    def lookup_all(self, names: Iterable[str]) -> List[ReducerProtocol]:
        """Resolve every name or fail before the caller touches any reducer."""
        return [self.lookup(n) for n in names]

    def names(self) -> List[str]:
        return list(self._reducers)

    def __contains__(self, name: object) -> bool:
        return name in self._reducers

    def __len__(self) -> int:
        return len(self._reducers)


# ----- internal plumbing -----

def _coerce(name: str, reducer: Any) -> ReducerProtocol:
    if isinstance(reducer, Mapping):
        return Reducer.from_mapping(reducer)
    for attr in ("forward", "reverse", "label_for", "is_duplicate_of"):
        if not callable(getattr(reducer, attr, None)):
            raise TypeError(f"Reducer for {name!r} has no callable '{attr}'")
    if not hasattr(reducer, "suppress_duplicates"):
        raise TypeError(f"Reducer for {name!r} has no 'suppress_duplicates' flag")
    return reducer
