"""
Public API for the history package.

Import from here everywhere else, so you can refactor internals freely:
    from history import (
        History, HistoryConfig, load_config,
        Action, Reducer, RecordedEntry, ActionSummary, ReducerProtocol,
        HistoryError, UnknownAction, DuplicateReducer, IncompatibleSnapshot, Reentrancy,
        dumps, loads, SNAPSHOT_VERSION,
    )
"""
from .commands import Action
from .model import Reducer, RecordedEntry, ActionSummary
from .protocol import ReducerProtocol
from .errors import (
    HistoryError, UnknownAction, DuplicateReducer, IncompatibleSnapshot, Reentrancy,
)
from .config import HistoryConfig, load_config
from .registry import ReducerRegistry
from .snapshot import SNAPSHOT_VERSION, dumps, loads
from .engine import History

__all__ = [
    # engine
    "History",
    # config
    "HistoryConfig", "load_config",
    # model & commands
    "Action", "Reducer", "RecordedEntry", "ActionSummary", "ReducerProtocol",
    "ReducerRegistry",
    # errors
    "HistoryError", "UnknownAction", "DuplicateReducer", "IncompatibleSnapshot", "Reentrancy",
    # snapshots
    "SNAPSHOT_VERSION", "dumps", "loads",
]
