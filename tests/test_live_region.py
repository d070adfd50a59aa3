import logging

from gui.services.live_region import LiveRegionAnnouncer


def test_announce_requires_init():
    ann = LiveRegionAnnouncer()
    ann.announce("too early")
    assert ann.recent() == []
    ann.init()
    ann.announce("hello")
    assert ann.recent() == ["hello"]
    assert ann.last == "hello"


def test_listeners_receive_text():
    ann = LiveRegionAnnouncer()
    ann.init()
    got = []
    remove = ann.add_listener(got.append)
    ann.announce("one")
    remove()
    ann.announce("two")
    assert got == ["one"]


def test_failing_listener_does_not_break_announce(caplog):
    ann = LiveRegionAnnouncer()
    ann.init()
    got = []

    def broken(_text):
        raise RuntimeError("boom")

    ann.add_listener(broken)
    ann.add_listener(got.append)
    with caplog.at_level(logging.WARNING, logger="gui.services.live_region"):
        ann.announce("still delivered")
    assert got == ["still delivered"]
    assert "listener failed" in caplog.text


def test_capacity_bounds_history():
    ann = LiveRegionAnnouncer(capacity=2)
    ann.init()
    for text in ("a", "b", "c"):
        ann.announce(text)
    assert ann.recent() == ["b", "c"]
    assert ann.recent(limit=1) == ["c"]


def test_teardown_clears_and_deactivates():
    ann = LiveRegionAnnouncer()
    ann.init()
    got = []
    ann.add_listener(got.append)
    ann.announce("x")
    ann.teardown()
    assert ann.active is False
    assert ann.recent() == []
    ann.announce("after teardown")
    assert got == ["x"]
    ann.teardown()  # idempotent
