import logging

import pytest

from domain.board_state import commit_reorder
from domain.models import (
    DropPayload,
    SourceData,
    TargetDescriptor,
    Trigger,
    get_basic_data,
)
from gui.design.hitbox import Edge, Rect, attach_closest_edge
from gui.services.drag_coordinator import DragEventCoordinator
from gui.services.event_bus import BoardEvent, EventBus

INSTANCE = "board-1"


class Harness:
    def __init__(self):
        self.state = get_basic_data()
        self.commits = []
        self.coordinator = DragEventCoordinator(INSTANCE, lambda: self.state, self.commit)

    def commit(self, start, finish, trigger):
        self.commits.append((start, finish, trigger))
        self.state = commit_reorder(self.state, start, finish, trigger)


@pytest.fixture
def harness():
    return Harness()


def _edge(edge):
    x = 1 if edge is Edge.LEFT else 99
    return attach_closest_edge(
        {"columnId": "ignored"}, x=x, y=10, rect=Rect(0, 0, 100, 200), allowed_edges=(Edge.LEFT, Edge.RIGHT)
    )


def _payload(source_id, target_id=None, edge=None, *, instance=INSTANCE, kind="column"):
    targets = ()
    if target_id is not None:
        targets = (TargetDescriptor(target_id, _edge(edge) if edge else {}),)
    return DropPayload(source_data=SourceData(kind, source_id, instance), dropped_on_targets=targets)


def test_drop_after_target_commits_pointer_move(harness):
    assert harness.coordinator.handle_drop(_payload("confluence", "trello", Edge.RIGHT)) is True
    assert harness.commits == [(0, 2, Trigger.POINTER)]
    assert harness.state.ordered_column_ids == ("jira", "trello", "confluence")


def test_drop_before_target(harness):
    harness.coordinator.handle_drop(_payload("confluence", "trello", Edge.LEFT))
    assert harness.state.ordered_column_ids == ("jira", "confluence", "trello")


def test_backward_drop_after_target(harness):
    harness.coordinator.handle_drop(_payload("trello", "confluence", Edge.RIGHT))
    assert harness.commits == [(2, 1, Trigger.POINTER)]


def test_self_drop_commits_noop(harness):
    harness.coordinator.handle_drop(_payload("jira", "jira"))
    assert harness.commits == [(1, 1, Trigger.POINTER)]
    assert harness.state.ordered_column_ids == ("confluence", "jira", "trello")


def test_empty_drop_is_ignored(harness):
    assert harness.coordinator.handle_drop(_payload("jira")) is False
    assert harness.commits == []
    assert harness.state.last_operation is None


def test_other_payload_type_is_ignored(harness):
    assert harness.coordinator.handle_drop(_payload("jira", "trello", kind="card")) is False
    assert harness.commits == []


def test_unknown_column_is_ignored(harness, caplog):
    with caplog.at_level(logging.WARNING, logger="gui.services.drag_coordinator"):
        assert harness.coordinator.handle_drop(_payload("ghost", "jira")) is False
        assert harness.coordinator.handle_drop(_payload("jira", "ghost")) is False
    assert harness.commits == []
    assert "unknown column" in caplog.text


def test_reads_fresh_state_per_drop(harness):
    harness.coordinator.handle_drop(_payload("confluence", "trello", Edge.RIGHT))
    # confluence is now last; dropping it before jira moves it to the front
    harness.coordinator.handle_drop(_payload("confluence", "jira", Edge.LEFT))
    assert harness.state.ordered_column_ids == ("confluence", "jira", "trello")


def test_subscription_scoped_to_instance(harness):
    bus = EventBus()
    harness.coordinator.attach(bus)
    bus.publish(BoardEvent.DROP, _payload("confluence", "trello", Edge.RIGHT, instance="other"))
    assert harness.commits == []
    bus.publish(BoardEvent.DROP, _payload("confluence", "trello", Edge.RIGHT))
    assert harness.commits == [(0, 2, Trigger.POINTER)]


def test_malformed_payload_never_raises(harness):
    bus = EventBus()
    harness.coordinator.attach(bus)
    bus.publish(BoardEvent.DROP, {"not": "a payload"})
    broken = DropPayload(source_data=SourceData("column", "jira", INSTANCE), dropped_on_targets=(None,))  # type: ignore[arg-type]
    bus.publish(BoardEvent.DROP, broken)
    assert bus.errors == []
    assert harness.commits == []


def test_attach_is_idempotent_and_detach_releases(harness):
    bus = EventBus()
    harness.coordinator.attach(bus)
    harness.coordinator.attach(bus)
    assert bus.subscriber_count(BoardEvent.DROP) == 1
    harness.coordinator.detach()
    harness.coordinator.detach()
    assert bus.subscriber_count(BoardEvent.DROP) == 0
    assert harness.coordinator.is_attached is False


def test_attached_context_releases_on_error(harness):
    bus = EventBus()
    with pytest.raises(RuntimeError):
        with harness.coordinator.attached(bus):
            assert bus.subscriber_count(BoardEvent.DROP) == 1
            raise RuntimeError("board torn down mid-drag")
    assert bus.subscriber_count(BoardEvent.DROP) == 0
