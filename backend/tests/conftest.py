import os
import tempfile
from decimal import Decimal

# 日志目录和定时任务在导入 settings 之前确定
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="logistics-logs-"))
os.environ.setdefault("RECONCILE_ENABLED", "false")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from logistics.core.config import settings
from logistics.core.deps import get_db
from logistics.db.init_db import ensure_default_admin, ensure_tables_exist
from logistics.main import app
from logistics.models import Truck, Warehouse
from logistics.schemas.order import OrderCreate
from logistics.schemas.order_item import OrderItemCreate
from logistics.services import orders as order_service

USER_ID = settings.DEFAULT_USER_ID


@pytest.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await ensure_tables_exist(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(
        bind=engine,
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False,
    )


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        await ensure_default_admin(session)
        yield session


@pytest.fixture
async def client(session_factory, db):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def make_warehouse(db):
    async def _make(name="Склад Урумчи"):
        warehouse = Warehouse(name=name, location="Урумчи", created_by=USER_ID)
        db.add(warehouse)
        await db.commit()
        return warehouse
    return _make


@pytest.fixture
def make_truck(db):
    async def _make(number="01A777AA", capacity=Decimal("20000")):
        truck = Truck(number=number, capacity=capacity, created_by=USER_ID)
        db.add(truck)
        await db.commit()
        return truck
    return _make


@pytest.fixture
def make_order(db):
    async def _make(name="Юсуф-77"):
        return await order_service.create_order(db, OrderCreate(name=name), USER_ID)
    return _make


@pytest.fixture
def make_item(db):
    async def _make(order_id, **fields):
        data = {"code": "K-1", "name": "Ковер", "quantity": 10, "volume_type": "kg"}
        data.update(fields)
        return await order_service.create_order_item(db, order_id, OrderItemCreate(**data), USER_ID)
    return _make
