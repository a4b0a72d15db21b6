from __future__ import annotations


class HistoryError(Exception):
    """Base class for every error raised by the history engine."""


class UnknownAction(HistoryError, KeyError):
    """An action (or child action) names a reducer that is not registered."""

    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"No reducer registered for action: {self.name}"


class DuplicateReducer(HistoryError):
    """Registering over an existing name while overwrites are forbidden."""

    def __init__(self, name: str):
        super().__init__(f"A reducer is already registered for action: {name}")
        self.name = name


class IncompatibleSnapshot(HistoryError, ValueError):
    """A snapshot has an unknown version or a malformed shape."""


class Reentrancy(HistoryError, RuntimeError):
    """A reducer callback tried to drive the engine that is calling it."""
