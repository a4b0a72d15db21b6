import pytest
from history import Action, History, Reducer, Reentrancy, UnknownAction


def test_undo_and_redo_walk_the_stack(history, state):
    history.dispatch(Action("ope_a", 10))
    history.dispatch(Action("ope_a", 20))

    assert state["value"] == 20
    assert history.get_cursor() == 1
    history.undo()
    assert state["value"] == 10
    assert history.get_cursor() == 0
    history.undo()
    assert state["value"] == 0
    assert history.get_cursor() == -1
    history.undo()
    assert state["value"] == 0
    assert history.get_cursor() == -1

    history.redo()
    assert state["value"] == 10
    assert history.get_cursor() == 0
    history.redo()
    assert state["value"] == 20
    assert history.get_cursor() == 1
    history.redo()
    assert state["value"] == 20
    assert history.get_cursor() == 1


def test_boundaries_do_not_notify(history, updates):
    history.undo()
    history.redo()
    assert updates.calls == 0

    history.dispatch(Action("ope_a", 1))
    history.redo()
    assert updates.calls == 1
    history.undo()
    history.undo()
    assert updates.calls == 2


def test_full_round_trip_restores_state(history, state):
    history.dispatch(Action("ope_a", 1))
    history.dispatch(Action("ope_b", 2))
    history.dispatch(Action("ope_a", 3), children=[Action("ope_b", 4)])
    after = dict(state)

    while history.can_undo():
        history.undo()
    assert state == {"value": 0, "value2": 0}

    while history.can_redo():
        history.redo()
    assert state == after
    assert history.get_cursor() == len(history) - 1


def test_jump_moves_with_single_notification(history, state, updates):
    for v in (1, 2, 3, 4):
        history.dispatch(Action("ope_a", v))
    updates.calls = 0

    history.jump(0)
    assert state["value"] == 1
    assert history.get_cursor() == 0
    assert updates.calls == 1

    history.jump(3)
    assert state["value"] == 4
    assert updates.calls == 2


def test_jump_clamps_and_ignores_current_position(history, state, updates):
    history.dispatch(Action("ope_a", 1))
    history.dispatch(Action("ope_a", 2))
    updates.calls = 0

    history.jump(99)
    assert updates.calls == 0

    history.jump(-50)
    assert history.get_cursor() == -1
    assert state["value"] == 0
    assert updates.calls == 1

    history.jump(-1)
    assert updates.calls == 1


def test_clear_resets_and_notifies(history, updates):
    history.dispatch(Action("ope_a", 20))
    assert history.get_cursor() == 0
    history.clear()
    assert history.get_cursor() == -1
    assert len(history) == 0
    assert updates.calls == 2


def test_undo_with_unregistered_reducer_keeps_cursor(state):
    h = History()
    h.deserialize({
        "version": "0",
        "stack": [{"name": "ghost", "forward_args": 1, "reverse_args": 0}],
        "cursor": 0,
    })
    with pytest.raises(UnknownAction):
        h.undo()
    assert h.get_cursor() == 0


def test_reentrant_dispatch_is_rejected():
    h = History()

    def forward(args):
        h.dispatch(Action("noop", None))

    h.register("noop", Reducer(forward=lambda a: None, reverse=lambda r: None))
    h.register("nested", Reducer(forward=forward, reverse=lambda r: None))

    with pytest.raises(Reentrancy):
        h.dispatch(Action("nested", None))
    # the guard is released after the failure
    h.dispatch(Action("noop", None))
    assert h.get_cursor() == 0


def test_failing_forward_keeps_redo_branch(history, state):
    def broken(args):
        raise RuntimeError("boom")

    history.register("broken", Reducer(forward=broken, reverse=lambda r: None))
    history.dispatch(Action("ope_a", 1))
    history.dispatch(Action("ope_a", 2))
    history.undo()

    with pytest.raises(RuntimeError, match="boom"):
        history.dispatch(Action("broken", None))

    assert len(history) == 2
    assert history.get_cursor() == 0
    history.redo()
    assert state["value"] == 2


@pytest.mark.parametrize("call", ["undo", "redo", "jump"])
def test_reentrant_no_op_moves_still_rejected(call):
    h = History()
    seen = []

    def forward(args):
        # at this point the cursor is -1 and the stack is empty: every move would be a no-op
        with pytest.raises(Reentrancy):
            if call == "jump":
                h.jump(0)
            else:
                getattr(h, call)()
        seen.append(call)

    h.register("nested", Reducer(forward=forward, reverse=lambda r: None))
    h.dispatch(Action("nested", None))
    assert seen == [call]
    assert h.get_cursor() == 0
