from __future__ import annotations
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Sequence
import logging

from .commands import Action
from .config import HistoryConfig
from .errors import Reentrancy
from .model import ActionSummary, RecordedEntry
from .registry import ReducerRegistry
from . import snapshot as snap
from . import stack as st

logger = logging.getLogger(__name__)


class History:
    """
    Undo/redo engine over caller-owned state.

    Usage:
        history = History(on_updated=refresh_ui)
        history.register("set_value", Reducer(forward=..., reverse=...))
        history.dispatch(Action("set_value", 10))
        history.undo(); history.redo(); history.jump(-1)

    Entries at index <= cursor are applied; entries above it are kept only
    for redo. Reducer callbacks must not call back into the same instance
    (raises Reentrancy).
    """

    def __init__(
        self,
        config: Optional[HistoryConfig] = None,
        on_updated: Optional[Callable[[], None]] = None,
        max_history_length: Optional[int] = None,
        forbid_overwrite_reducers: Optional[bool] = None,
    ):
        self.config = (config or HistoryConfig()).replace(
            max_history_length=max_history_length,
            forbid_overwrite_reducers=forbid_overwrite_reducers,
        )
        self.on_updated = on_updated
        self.registry = ReducerRegistry(forbid_overwrite=self.config.forbid_overwrite_reducers)
        self._stack: List[RecordedEntry] = []
        self._cursor = -1
        self._busy = False

    # ----- reducers -----

    def register(self, name: str, reducer: Any) -> None:
        self.registry.register(name, reducer)

    define_reducer = register

    def define_reducers(self, reducers: Mapping[str, Any]) -> Callable[..., None]:
        """Register a batch of reducers and hand back the dispatch function."""
        for name, reducer in reducers.items():
            self.registry.register(name, reducer)
        return self.dispatch

    # ----- dispatch -----

    def dispatch(self, action: Optional[Action], children: Optional[Sequence[Action]] = None) -> None:
        if action is None:
            return
        children = list(children or [])

        with self._guard():
            reducer = self.registry.lookup(action.name)
            child_reducers = self.registry.lookup_all(c.name for c in children)

            if reducer.suppress_duplicates and self._cursor > -1:
                current = self._stack[self._cursor]
                if current.name == action.name and reducer.is_duplicate_of(action.args, current.forward_args):
                    logger.debug("Suppressed duplicate action: %s", action.name)
                    return

            entry = RecordedEntry(
                name=action.name,
                forward_args=action.args,
                reverse_args=reducer.forward(action.args),
                series_key=action.series_key,
            )
            for child, child_reducer in zip(children, child_reducers):
                entry.children.append(RecordedEntry(
                    name=child.name,
                    forward_args=child.args,
                    reverse_args=child_reducer.forward(child.args),
                    series_key=child.series_key,
                ))

            # redo branch goes only once every forward call has succeeded
            dropped = st.truncate_redo(self._stack, self._cursor)
            if dropped:
                logger.debug("Discarded %d redo entr%s", dropped, "y" if dropped == 1 else "ies")

            if st.coalesce_series(self._stack, entry):
                logger.debug("Merged %s into series %r", entry.name, entry.series_key)
            self._stack.append(entry)
            self._cursor = len(self._stack) - 1

            before = len(self._stack)
            self._cursor = st.cap_length(self._stack, self._cursor, self.config.max_history_length)
            if len(self._stack) < before:
                logger.info("History full (%d): evicted %d oldest entr%s",
                            self.config.max_history_length, before - len(self._stack),
                            "y" if before - len(self._stack) == 1 else "ies")

            logger.debug("Dispatched %s (cursor=%d)", action.name, self._cursor)
        self._notify()

    # ----- cursor movement -----

    def undo(self) -> None:
        with self._guard():
            if self._cursor < 0:
                return
            self._undo_step()
        self._notify()

    def redo(self) -> None:
        with self._guard():
            if self._cursor >= len(self._stack) - 1:
                return
            self._redo_step()
        self._notify()

    def jump(self, index: int) -> None:
        start = self._cursor
        try:
            with self._guard():
                target = max(-1, min(int(index), len(self._stack) - 1))
                while self._cursor > target:
                    self._undo_step()
                while self._cursor < target:
                    self._redo_step()
        finally:
            # one notification for the whole walk, even if a step failed midway
            if self._cursor != start:
                logger.debug("Jumped %d -> %d", start, self._cursor)
                self._notify()

    def clear(self) -> None:
        with self._guard():
            self._stack = []
            self._cursor = -1
            logger.debug("History cleared")
        self._notify()

    def _undo_step(self) -> None:
        entry = self._stack[self._cursor]
        reducer = self.registry.lookup(entry.name)
        child_reducers = self.registry.lookup_all(entry.child_names())

        for child, child_reducer in reversed(list(zip(entry.children, child_reducers))):
            child_reducer.reverse(child.reverse_args)
        reducer.reverse(entry.reverse_args)
        self._cursor -= 1
        logger.debug("Undid %s (cursor=%d)", entry.name, self._cursor)

    def _redo_step(self) -> None:
        entry = self._stack[self._cursor + 1]
        reducer = self.registry.lookup(entry.name)
        child_reducers = self.registry.lookup_all(entry.child_names())

        # returned reverse args are ignored; the recorded ones stay authoritative
        reducer.forward(entry.forward_args)
        for child, child_reducer in zip(entry.children, child_reducers):
            child_reducer.forward(child.forward_args)
        self._cursor += 1
        logger.debug("Redid %s (cursor=%d)", entry.name, self._cursor)

    # ----- queries -----

    def get_cursor(self) -> int:
        return self._cursor

    def can_undo(self) -> bool:
        return self._cursor > -1

    def can_redo(self) -> bool:
        return self._cursor < len(self._stack) - 1

    def get_summaries(self) -> List[ActionSummary]:
        out: List[ActionSummary] = []
        for i, entry in enumerate(self._stack):
            out.append(ActionSummary(
                name=entry.name,
                label=self._label(entry),
                done=i <= self._cursor,
            ))
        return out

    def __len__(self) -> int:
        return len(self._stack)

    def _label(self, entry: RecordedEntry) -> str:
        if entry.name not in self.registry:
            return entry.name
        return self.registry.lookup(entry.name).label_for(entry)

    # ----- snapshots -----

    def serialize(self) -> Dict[str, Any]:
        return snap.build_snapshot(self._stack, self._cursor)

    def deserialize(self, snapshot: Dict[str, Any]) -> None:
        """
        Replace stack and cursor from a snapshot without calling any reducer.
        External state must already match what the snapshot implies.
        """
        with self._guard():
            stack, cursor = snap.restore_snapshot(snapshot)
            self._stack = stack
            self._cursor = cursor
            logger.info("Restored history: %d entries, cursor=%d", len(stack), cursor)
        self._notify()

    # ----- internal plumbing -----

    @contextmanager
    def _guard(self) -> Iterator[None]:
        if self._busy:
            raise Reentrancy("History operation called from inside a reducer callback")
        self._busy = True
        try:
            yield
        finally:
            self._busy = False

    def _notify(self) -> None:
        if self.on_updated is not None:
            self.on_updated()
