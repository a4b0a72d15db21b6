from history import Action, ActionSummary


def test_summaries_report_labels_and_done_flags(history):
    history.dispatch(Action("ope_a", 10))
    history.dispatch(Action("ope_b", 20))

    assert history.get_summaries() == [
        ActionSummary(name="ope_a", label="ope_a", done=True),
        ActionSummary(name="ope_b", label="label_ope_b", done=True),
    ]

    history.undo()
    assert history.get_summaries() == [
        ActionSummary(name="ope_a", label="ope_a", done=True),
        ActionSummary(name="ope_b", label="label_ope_b", done=False),
    ]


def test_summaries_fall_back_to_name_for_unregistered_entries():
    from history import History
    h = History()
    h.deserialize({"version": "0", "stack": [{"name": "legacy", "forward_args": None, "reverse_args": None}]})
    assert h.get_summaries() == [ActionSummary(name="legacy", label="legacy", done=True)]
