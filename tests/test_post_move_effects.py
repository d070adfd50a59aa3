import logging

import pytest

from domain.board_state import commit_reorder
from domain.models import BoardState, Operation, Outcome, Trigger, get_basic_data
from gui.services.column_registry import ColumnRegistry
from gui.services.live_region import LiveRegionAnnouncer
from gui.services.post_move_effects import PostMoveEffectsDispatcher, format_move_announcement


@pytest.fixture
def setup():
    registry = ColumnRegistry()
    for cid in ("confluence", "jira", "trello"):
        registry.register_column(cid, f"handle-{cid}")
    announcer = LiveRegionAnnouncer()
    announcer.init()
    flashed = []
    dispatcher = PostMoveEffectsDispatcher(registry, announcer, flashed.append)
    return registry, announcer, flashed, dispatcher


def test_no_effects_without_operation(setup):
    _, announcer, flashed, dispatcher = setup
    assert dispatcher.dispatch(get_basic_data()) is False
    assert flashed == []
    assert announcer.recent() == []


def test_fires_once_per_operation(setup):
    _, announcer, flashed, dispatcher = setup
    state = commit_reorder(get_basic_data(), 0, 2, Trigger.POINTER)
    assert dispatcher.dispatch(state) is True
    assert dispatcher.dispatch(state) is False  # re-render with same operation
    assert flashed == ["handle-confluence"]
    assert announcer.recent() == ["You've moved Confluence from position 1 to position 3 of 3."]


def test_new_operation_fires_again(setup):
    _, announcer, flashed, dispatcher = setup
    state = commit_reorder(get_basic_data(), 0, 2, Trigger.POINTER)
    dispatcher.dispatch(state)
    state = commit_reorder(state, 2, 0, Trigger.KEYBOARD)
    dispatcher.dispatch(state)
    assert flashed == ["handle-confluence", "handle-confluence"]
    assert announcer.last == "You've moved Confluence from position 3 to position 1 of 3."


def test_noop_move_still_announces(setup):
    _, announcer, flashed, dispatcher = setup
    dispatcher.dispatch(commit_reorder(get_basic_data(), 1, 1, Trigger.KEYBOARD))
    assert flashed == ["handle-jira"]
    assert announcer.last == "You've moved Jira from position 2 to position 2 of 3."


def test_missing_registry_entry_skips_flash_only(setup, caplog):
    registry, announcer, flashed, _ = setup
    empty = ColumnRegistry()
    dispatcher = PostMoveEffectsDispatcher(empty, announcer, flashed.append)
    state = commit_reorder(get_basic_data(), 0, 1, Trigger.POINTER)
    with caplog.at_level(logging.WARNING, logger="gui.services.post_move_effects"):
        assert dispatcher.dispatch(state) is True
    assert flashed == []
    assert announcer.last == "You've moved Confluence from position 1 to position 2 of 3."
    assert "not mounted" in caplog.text


def test_failing_flash_does_not_block_announcement(setup):
    registry, announcer, _, _ = setup

    def broken(_handle):
        raise RuntimeError("no paint device")

    dispatcher = PostMoveEffectsDispatcher(registry, announcer, broken)
    dispatcher.dispatch(commit_reorder(get_basic_data(), 2, 0, Trigger.POINTER))
    assert announcer.last == "You've moved Trello from position 3 to position 1 of 3."


def test_unknown_outcome_kind_is_skipped(setup):
    _, announcer, flashed, dispatcher = setup
    base = get_basic_data()
    odd = Operation(Trigger.POINTER, Outcome("card-move", "jira", 0, 1))  # type: ignore[arg-type]
    state = BoardState(base.column_map, base.ordered_column_ids, odd)
    assert dispatcher.dispatch(state) is False
    assert flashed == []
    assert announcer.recent() == []


def test_format_move_announcement():
    assert format_move_announcement("Jira", 0, 0, 1) == (
        "You've moved Jira from position 1 to position 1 of 1."
    )
