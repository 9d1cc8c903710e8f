from datetime import datetime, timezone

import pytest

from app.domain.errors import IllegalStateError
from app.domain.order import ORDER_ACTIONS, Order, OrderStatus, evaluate_readiness
from app.domain.photo_document import PhotoDocument
from app.domain.templates import SIDE_VIEW_OF_WELD, TOP_VIEW_OF_JOINT

T0 = datetime(2024, 5, 1, 8, 0, tzinfo=timezone.utc)


def _photo(pid, template=TOP_VIEW_OF_JOINT):
    return PhotoDocument(pid, template, f"/img/{pid}.jpg", "tech", T0)


@pytest.fixture
def order():
    return Order("o1", "QC-1001", "planner", T0)


def _complete(order):
    order.start_processing()
    order.complete_processing()


def test_happy_path(order):
    _complete(order)
    order.approve()
    order.deliver()
    assert order.is_delivered()


def test_reject_after_completion(order):
    _complete(order)
    order.reject()
    assert order.is_rejected()


@pytest.mark.parametrize("action", ["complete_processing", "approve", "reject", "deliver"])
def test_illegal_from_pending(order, action):
    with pytest.raises(IllegalStateError, match="PENDING") as exc:
        order.apply(action)
    assert exc.value.current_state is OrderStatus.PENDING
    assert order.status is OrderStatus.PENDING


def test_cancel_from_any_but_delivered(order):
    order.start_processing()
    order.cancel()
    assert order.status is OrderStatus.CANCELLED

    delivered = Order("o2", "QC-1002", "planner", T0, status=OrderStatus.DELIVERED)
    with pytest.raises(IllegalStateError, match="already been delivered"):
        delivered.cancel()


def test_unknown_action(order):
    assert "deliver" in ORDER_ACTIONS
    with pytest.raises(ValueError):
        order.apply("teleport")


def test_add_photo_binds_to_order(order):
    photo = _photo("p1")
    order.add_photo(photo)
    assert photo.order_id == "o1"
    assert order.get_photo("p1") is photo
    assert order.get_photo("nope") is None


def test_readiness_requires_completed_and_any_photo(order):
    assert not order.is_ready_for_qa_review()
    order.add_photo(_photo("p1"))
    assert not order.is_ready_for_qa_review()
    _complete(order)
    assert order.is_ready_for_qa_review()


def test_readiness_counts_rejected_photos():
    photo = _photo("p1")
    photo.reject("qa", T0)
    summary = evaluate_readiness(OrderStatus.COMPLETED, [photo])
    assert summary.ready_for_qa_review
    assert summary.rejected == (photo,)
    assert summary.approved == ()


def test_readiness_partitions(order):
    approved, pending, rejected = _photo("a"), _photo("p", SIDE_VIEW_OF_WELD), _photo("r")
    approved.approve("qa", T0)
    rejected.reject("qa", T0)
    for p in (approved, pending, rejected):
        order.add_photo(p)
    _complete(order)

    summary = order.readiness()
    assert summary.total == 3
    assert summary.approved == (approved,)
    assert summary.pending == (pending,)
    assert summary.rejected == (rejected,)
    assert order.approved_photos() == [approved]
    assert order.pending_photos() == [pending]
    assert order.rejected_photos() == [rejected]


def test_empty_completed_order_not_ready():
    assert not evaluate_readiness(OrderStatus.COMPLETED, []).ready_for_qa_review


def test_create_and_customer(order):
    created = Order.create("QC-2000", "planner", customer_id="acme")
    assert created.status is OrderStatus.PENDING
    assert created.customer_id == "acme"
    order.customer_id = "globex"
    assert order.customer_id == "globex"
    with pytest.raises(ValueError):
        order.customer_id = None
