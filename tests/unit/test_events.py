from datetime import datetime, timezone

from app.domain.events import DomainEvent, EventDispatcher, PhotoApproved, ReportFailed

T0 = datetime(2024, 5, 1, tzinfo=timezone.utc)


def _approved():
    return PhotoApproved(occurred_at=T0, photo_id="p1", order_id="o1", reviewer="qa")


def test_handlers_receive_matching_events():
    dispatcher = EventDispatcher()
    seen = []
    dispatcher.subscribe(PhotoApproved, seen.append)
    assert dispatcher.publish(_approved()) == 1
    assert dispatcher.publish(ReportFailed(T0, "r1", "o1", "boom")) == 0
    assert [e.name for e in seen] == ["PhotoApproved"]


def test_base_type_subscription_sees_everything():
    dispatcher = EventDispatcher()
    specific, everything = [], []
    dispatcher.subscribe(PhotoApproved, specific.append)
    dispatcher.subscribe(DomainEvent, everything.append)
    assert dispatcher.publish_all([_approved(), None, ReportFailed(T0, "r1", "o1", "boom")]) == 3
    assert len(specific) == 1
    assert len(everything) == 2


def test_unsubscribe():
    dispatcher = EventDispatcher()
    seen = []
    dispatcher.subscribe(PhotoApproved, seen.append)
    assert dispatcher.unsubscribe(PhotoApproved, seen.append)
    assert not dispatcher.unsubscribe(PhotoApproved, seen.append)
    dispatcher.publish(_approved())
    assert seen == []
