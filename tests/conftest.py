import os

# La configuración se lee al importar la app: apuntamos a SQLite en memoria antes
os.environ.setdefault("SQLALCHEMY_DATABASE_URI", "sqlite+aiosqlite://")

import httpx
import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.api import deps
from app.db.database import Base, build_engine
from app.db.models import client_model, restaurant_model, order_model  # noqa: F401
from app.main import app


@pytest.fixture
async def engine():
    test_engine = build_engine("sqlite+aiosqlite://")
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[deps.get_db] = override_get_db
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


# ========================================
# DATOS DE PRUEBA
# ========================================

def client_form(**overrides):
    data = {"firstName": "Ada", "lastName": "Lovelace", "phone": "", "address": "12 Analytical St"}
    data.update(overrides)
    return data


def restaurant_form(**overrides):
    data = {"name": "Trattoria Roma", "phone": "", "address": "1 Via Appia"}
    data.update(overrides)
    return data


def order_form(client_id, restaurant_id, items=None):
    import json

    if items is None:
        items = [
            {"quantity": 2, "description": "Margherita", "unitPrice": "9.50"},
            {"quantity": 1, "description": "Tiramisu", "unitPrice": "5.25"},
        ]
    return {"clientId": client_id, "restaurantId": restaurant_id, "items": json.dumps(items)}


@pytest.fixture
def make_client(db):
    from app.services.client_service import client_service

    async def _make(**overrides):
        result = await client_service.create_client(db, client_form(**overrides))
        assert result.ok, result.error and result.error.message
        return result.value

    return _make


@pytest.fixture
def make_restaurant(db):
    from app.services.restaurant_service import restaurant_service

    async def _make(**overrides):
        result = await restaurant_service.create_restaurant(db, restaurant_form(**overrides))
        assert result.ok, result.error and result.error.message
        return result.value

    return _make


@pytest.fixture
def make_order(db):
    from app.services.order_service import order_service

    async def _make(client_id, restaurant_id, items=None):
        result = await order_service.create_order(db, order_form(client_id, restaurant_id, items))
        assert result.ok, result.error and result.error.message
        return result.value

    return _make
