import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError

from app.core.exceptions import DeleteFailedError, InvalidIdError, NotFoundError
from app.crud import order_crud
from app.db.models.client_model import Client
from app.db.models.order_model import Item, Order
from app.db.models.restaurant_model import Restaurant
from app.services.cascade_service import cascade_deletion_service


async def count(session, model, *conditions):
    result = await session.execute(select(func.count()).select_from(model).where(*conditions))
    return result.scalar_one()


@pytest.fixture
async def populated(make_client, make_restaurant, make_order):
    """Dos clientes y dos restaurantes; cada cliente con pedidos en ambos."""
    ada = await make_client(firstName="Ada")
    grace = await make_client(firstName="Grace", lastName="Hopper")
    roma = await make_restaurant(name="Roma")
    tokyo = await make_restaurant(name="Tokyo")

    await make_order(ada.id, roma.id)
    await make_order(ada.id, tokyo.id)
    await make_order(ada.id, roma.id, items=[{"quantity": 1, "description": "Soup", "unitPrice": "4"}])
    await make_order(grace.id, roma.id)
    return {"ada": ada, "grace": grace, "roma": roma, "tokyo": tokyo}


async def test_delete_client_removes_orders_and_items(db, session_factory, populated):
    ada_id = populated["ada"].id

    result = await cascade_deletion_service.delete_client(db, ada_id)

    assert result.record_id == ada_id
    assert result.orders_deleted == 3
    assert result.items_deleted == 5

    async with session_factory() as check:
        assert await count(check, Client, Client.id == ada_id) == 0
        assert await count(check, Order, Order.client_id == ada_id) == 0
        assert await count(check, Order) == 1
        assert await count(check, Item) == 2
        # Ninguna línea apunta a un pedido inexistente
        orphans = await count(check, Item, Item.order_id.not_in(select(Order.id)))
        assert orphans == 0


async def test_delete_restaurant_removes_orders_of_every_client(db, session_factory, populated):
    roma_id = populated["roma"].id

    result = await cascade_deletion_service.delete_restaurant(db, roma_id)

    assert result.orders_deleted == 3
    async with session_factory() as check:
        assert await count(check, Restaurant, Restaurant.id == roma_id) == 0
        assert await count(check, Order, Order.restaurant_id == roma_id) == 0
        assert await count(check, Order) == 1
        assert await count(check, Client) == 2


async def test_delete_client_without_orders(db, make_client):
    lonely = await make_client(firstName="Lonely")

    result = await cascade_deletion_service.delete_client(db, lonely.id)

    assert result.orders_deleted == 0
    assert result.items_deleted == 0


async def test_delete_missing_client_is_not_found(db):
    with pytest.raises(NotFoundError):
        await cascade_deletion_service.delete_client(db, "00000000-0000-4000-8000-000000000000")


async def test_delete_twice_reports_not_found(db, make_client):
    ada_id = (await make_client()).id
    await cascade_deletion_service.delete_client(db, ada_id)

    with pytest.raises(NotFoundError):
        await cascade_deletion_service.delete_client(db, ada_id)


async def test_delete_with_malformed_id(db):
    with pytest.raises(InvalidIdError):
        await cascade_deletion_service.delete_restaurant(db, "42")


async def test_failed_step_rolls_back_everything(db, session_factory, populated, monkeypatch):
    ada_id = populated["ada"].id
    real_delete = order_crud.delete_orders_where

    async def delete_then_fail(session, condition):
        await real_delete(session, condition)
        raise SQLAlchemyError("simulated failure")

    monkeypatch.setattr(order_crud, "delete_orders_where", delete_then_fail)

    with pytest.raises(DeleteFailedError) as exc_info:
        await cascade_deletion_service.delete_client(db, ada_id)

    assert exc_info.value.message == "Failed to delete the client. Please try again later."
    async with session_factory() as check:
        assert await count(check, Client, Client.id == ada_id) == 1
        assert await count(check, Order, Order.client_id == ada_id) == 3
        assert await count(check, Item) == 7
