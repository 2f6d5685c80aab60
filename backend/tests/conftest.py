import os

# Tests never touch the configured database
os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.main import app
from app.db.database import build_engine, get_session, init_db


@pytest.fixture
async def engine():
    """Fresh in-memory SQLite database per test."""
    test_engine = build_engine("sqlite://")
    await init_db(test_engine)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def client(session_factory):
    """Async test client wired to the test database."""
    async def override_get_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def create_product(client):
    async def _create(name="Widget", price=10.0):
        response = await client.post("/api/products", json={"productName": name, "price": price})
        assert response.status_code == 201
        return response.json()
    return _create


@pytest.fixture
def create_customer(client):
    async def _create(name="Jane Doe", email="jane@example.com"):
        response = await client.post("/api/customers", json={"fullName": name, "email": email})
        assert response.status_code == 201
        return response.json()
    return _create


@pytest.fixture
def create_sale(client):
    async def _create(customer_id, product_id, quantity=1, sale_date=None):
        body = {"customerID": customer_id, "productID": product_id, "quantity": quantity}
        if sale_date is not None:
            body["saleDate"] = sale_date
        response = await client.post("/api/sales", json=body)
        assert response.status_code == 201
        return response.json()
    return _create
