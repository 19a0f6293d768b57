import pytest

from app.core.exceptions import (
    InvalidIdError,
    InvalidStatusError,
    InvalidTransitionError,
    NotFoundError,
)
from app.crud import order_crud
from app.db.models.order_model import OrderStatus
from app.services.order_lifecycle import (
    ALLOWED_TRANSITIONS,
    can_transition,
    next_statuses,
    order_lifecycle_service,
    parse_status,
)


@pytest.fixture
async def pending_order(make_client, make_restaurant, make_order):
    client = await make_client()
    restaurant = await make_restaurant()
    return await make_order(client.id, restaurant.id)


def test_transition_table():
    assert can_transition(OrderStatus.PENDING, OrderStatus.IN_PROGRESS)
    assert can_transition(OrderStatus.PENDING, OrderStatus.COMPLETED)
    assert can_transition(OrderStatus.IN_PROGRESS, OrderStatus.COMPLETED)
    assert not can_transition(OrderStatus.IN_PROGRESS, OrderStatus.PENDING)
    assert not can_transition(OrderStatus.PENDING, OrderStatus.PENDING)
    assert ALLOWED_TRANSITIONS[OrderStatus.COMPLETED] == frozenset()


def test_next_statuses_follow_workflow_order():
    assert next_statuses(OrderStatus.PENDING) == [OrderStatus.IN_PROGRESS, OrderStatus.COMPLETED]
    assert next_statuses(OrderStatus.COMPLETED) == []


@pytest.mark.parametrize("value", ["pending", "DONE", "", None, 3])
def test_parse_status_rejects_unknown_values(value):
    with pytest.raises(InvalidStatusError):
        parse_status(value)


def test_parse_status_accepts_enum_names():
    assert parse_status(" IN_PROGRESS ") is OrderStatus.IN_PROGRESS


async def test_new_order_is_pending_without_completed_at(pending_order):
    assert pending_order.status == OrderStatus.PENDING
    assert pending_order.completed_at is None


async def test_full_workflow_sets_completed_at_only_when_completed(db, pending_order):
    order = await order_lifecycle_service.transition(db, pending_order.id, "IN_PROGRESS")
    assert order.status == OrderStatus.IN_PROGRESS
    assert order.completed_at is None

    order = await order_lifecycle_service.transition(db, pending_order.id, "COMPLETED")
    assert order.status == OrderStatus.COMPLETED
    assert order.completed_at is not None


async def test_pending_can_be_completed_directly(db, pending_order):
    order = await order_lifecycle_service.transition(db, pending_order.id, OrderStatus.COMPLETED)
    assert order.status == OrderStatus.COMPLETED
    assert order.completed_at is not None


async def test_completed_is_terminal(db, pending_order):
    completed = await order_lifecycle_service.transition(db, pending_order.id, "COMPLETED")
    stamp = completed.completed_at

    for target in ("PENDING", "IN_PROGRESS", "COMPLETED"):
        with pytest.raises(InvalidTransitionError):
            await order_lifecycle_service.transition(db, pending_order.id, target)

    order = await order_crud.get_order(db, pending_order.id)
    assert order.status == OrderStatus.COMPLETED
    assert order.completed_at == stamp


async def test_backwards_transition_is_rejected(db, pending_order):
    await order_lifecycle_service.transition(db, pending_order.id, "IN_PROGRESS")

    with pytest.raises(InvalidTransitionError) as exc_info:
        await order_lifecycle_service.transition(db, pending_order.id, "PENDING")

    assert exc_info.value.message == "Invalid status transition from IN_PROGRESS to PENDING."
    assert await order_crud.get_order_status(db, pending_order.id) == OrderStatus.IN_PROGRESS


async def test_double_submit_only_applies_once(db, pending_order):
    await order_lifecycle_service.transition(db, pending_order.id, "IN_PROGRESS")

    with pytest.raises(InvalidTransitionError):
        await order_lifecycle_service.transition(db, pending_order.id, "IN_PROGRESS")


async def test_stale_read_loses_to_conditional_update(db, pending_order, monkeypatch):
    # Otra petición completa el pedido entre la lectura y la escritura
    await order_lifecycle_service.transition(db, pending_order.id, "COMPLETED")

    real_get_status = order_crud.get_order_status
    calls = []

    async def stale_then_real(session, order_id):
        calls.append(order_id)
        if len(calls) == 1:
            return OrderStatus.PENDING
        return await real_get_status(session, order_id)

    monkeypatch.setattr(order_crud, "get_order_status", stale_then_real)

    with pytest.raises(InvalidTransitionError) as exc_info:
        await order_lifecycle_service.transition(db, pending_order.id, "IN_PROGRESS")

    assert exc_info.value.current == "COMPLETED"
    assert len(calls) == 2


async def test_invalid_status_value_leaves_order_untouched(db, pending_order):
    with pytest.raises(InvalidStatusError):
        await order_lifecycle_service.transition(db, pending_order.id, "SHIPPED")

    assert await order_crud.get_order_status(db, pending_order.id) == OrderStatus.PENDING


async def test_unknown_order_is_not_found(db):
    with pytest.raises(NotFoundError):
        await order_lifecycle_service.transition(db, "00000000-0000-4000-8000-000000000000", "COMPLETED")


async def test_malformed_order_id(db):
    with pytest.raises(InvalidIdError):
        await order_lifecycle_service.transition(db, "not-an-id", "COMPLETED")
