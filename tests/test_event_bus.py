from gui.services.event_bus import BoardEvent, EventBus


def test_subscribe_publish_basic():
    bus = EventBus()
    received = []
    bus.subscribe(BoardEvent.STATE_CHANGED, lambda evt: received.append((evt.name, evt.payload)))
    bus.publish(BoardEvent.STATE_CHANGED, {"n": 1})
    assert received == [(BoardEvent.STATE_CHANGED.value, {"n": 1})]


def test_once_subscription():
    bus = EventBus()
    count = 0

    def incr(_):
        nonlocal count
        count += 1

    bus.subscribe(BoardEvent.DROP, incr, once=True)
    bus.publish(BoardEvent.DROP)
    bus.publish(BoardEvent.DROP)
    assert count == 1
    assert bus.subscriber_count(BoardEvent.DROP) == 0


def test_can_monitor_filters_events():
    bus = EventBus()
    seen = []
    bus.subscribe("custom", seen.append, can_monitor=lambda evt: evt.payload == "mine")
    bus.publish("custom", "theirs")
    bus.publish("custom", "mine")
    assert [e.payload for e in seen] == ["mine"]


def test_unsubscribe_and_cancel():
    bus = EventBus()
    seen = []
    sub = bus.subscribe("custom", seen.append)
    bus.unsubscribe(sub)
    bus.publish("custom", 1)
    sub2 = bus.subscribe("custom", seen.append)
    sub2.cancel()
    bus.publish("custom", 2)
    assert seen == []
    assert sub.active is False


def test_error_isolation():
    bus = EventBus()
    order = []

    def bad(_):
        order.append("bad")
        raise RuntimeError("boom")

    def good(_):
        order.append("good")

    bus.subscribe("custom", bad)
    bus.subscribe("custom", good)
    bus.publish("custom", 123)
    assert order == ["bad", "good"]
    assert len(bus.errors) == 1
    assert isinstance(bus.errors[0][1], RuntimeError)


def test_failing_predicate_is_isolated():
    bus = EventBus()
    seen = []

    def broken(_evt):
        raise ValueError("bad predicate")

    bus.subscribe("custom", seen.append, can_monitor=broken)
    bus.subscribe("custom", seen.append)
    bus.publish("custom", 1)
    assert len(seen) == 1
    assert len(bus.errors) == 1


def test_handler_can_unsubscribe_during_dispatch():
    bus = EventBus()
    calls = []
    holder = {}

    def once_manual(evt):
        calls.append(evt.payload)
        bus.unsubscribe(holder["sub"])

    holder["sub"] = bus.subscribe("custom", once_manual)
    bus.publish("custom", 1)
    bus.publish("custom", 2)
    assert calls == [1]


def test_clear():
    bus = EventBus()
    bus.subscribe("custom", lambda _: None)
    bus.clear()
    assert bus.subscriber_count("custom") == 0
