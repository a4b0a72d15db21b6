# tests/conftest.py
import sys
from pathlib import Path
import pytest

# Make "src" importable
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from history import History, Reducer


def make_setter(state, key):
    """Reducer that sets state[key] and hands back the previous value."""
    def forward(after):
        before = state[key]
        state[key] = after
        return before

    def reverse(before):
        state[key] = before

    return forward, reverse


class Counter:
    def __init__(self):
        self.calls = 0

    def __call__(self):
        self.calls += 1


@pytest.fixture
def state():
    return {"value": 0, "value2": 0}


@pytest.fixture
def updates():
    return Counter()


@pytest.fixture
def history(state, updates):
    # Fresh engine per test: ope_a -> value, ope_b -> value2 with a custom label
    h = History(on_updated=updates)
    fwd_a, rev_a = make_setter(state, "value")
    fwd_b, rev_b = make_setter(state, "value2")
    h.register("ope_a", Reducer(forward=fwd_a, reverse=rev_a))
    h.register("ope_b", Reducer(forward=fwd_b, reverse=rev_b, label=lambda e: f"label_{e.name}"))
    return h
