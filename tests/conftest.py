"""Shared fixtures: in-memory stores and service fakes for use case tests."""

import os
import uuid
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from decimal import Decimal

import pytest

# Tests never talk to a real Postgres
os.environ.setdefault("POSTGRES_CONNECTION_STRING", "sqlite+aiosqlite:///:memory:")

from checkout_service.domain.models import (  # noqa: E402
    Account, Cart, CartItem, CatalogueSnapshot, OrderRecord, Product
)


class InMemoryStore:
    def __init__(self):
        self.products: dict[str, Product] = {}
        self.stock: dict[str, int] = {}
        self.payments: dict = {}
        self.shipments: dict = {}
        self.orders: dict[str, OrderRecord] = {}
        self.writes: list[str] = []
        self.fail_on: set[str] = set()

    def _maybe_fail(self, operation: str):
        if operation in self.fail_on:
            raise RuntimeError(f"{operation} failed")


class FakeOrderRepository:
    def __init__(self, store: InMemoryStore):
        self._store = store

    async def create(self, user_id, items, payment_id, shipment_id, status, cancellation):
        self._store._maybe_fail("orders.create")
        record = OrderRecord(
            id=str(uuid.uuid4()),
            user_id=user_id,
            order_date=datetime.now(timezone.utc),
            items=items,
            payment_id=payment_id,
            shipment_id=shipment_id,
            status=status,
            cancellation=cancellation,
        )
        self._store.orders[record.id] = record
        self._store.writes.append("orders.create")
        return record

    async def get_by_id(self, order_id):
        return self._store.orders.get(order_id)

    async def get_by_user_id(self, user_id):
        return [o for o in self._store.orders.values() if o.user_id == user_id]

    async def update(self, order_id, data):
        record = self._store.orders.get(order_id)
        if not record:
            return False
        self._store.orders[order_id] = record.model_copy(update=data)
        self._store.writes.append("orders.update")
        return True

    async def delete(self, order_id):
        self._store.writes.append("orders.delete")
        return self._store.orders.pop(order_id, None) is not None


class FakeProductRepository:
    def __init__(self, store: InMemoryStore):
        self._store = store

    async def get(self, product_id):
        return self._store.products.get(product_id)


class FakePaymentRepository:
    def __init__(self, store: InMemoryStore):
        self._store = store

    async def get_by_id(self, payment_id):
        return self._store.payments.get(payment_id)

    async def store(self, payment):
        self._store._maybe_fail("payments.store")
        stored = payment.model_copy(update={"id": str(uuid.uuid4())})
        self._store.payments[stored.id] = stored
        self._store.writes.append("payments.store")
        return stored


class FakeShipmentRepository:
    def __init__(self, store: InMemoryStore):
        self._store = store

    async def get_by_id(self, shipment_id):
        return self._store.shipments.get(shipment_id)

    async def store(self, shipment):
        self._store._maybe_fail("shipments.store")
        stored = shipment.model_copy(update={"id": str(uuid.uuid4())})
        self._store.shipments[stored.id] = stored
        self._store.writes.append("shipments.store")
        return stored


class FakeCatalogueRepository:
    def __init__(self, store: InMemoryStore):
        self._store = store

    async def get_snapshot(self):
        return CatalogueSnapshot(quantities=dict(self._store.stock))

    async def update_quantity(self, product_id, new_quantity):
        self._store._maybe_fail(f"catalogue.update_quantity:{product_id}")
        self._store.stock[product_id] = new_quantity
        self._store.writes.append("catalogue.update_quantity")


class _FakeUnitOfWorkImpl:
    def __init__(self, store: InMemoryStore):
        self.orders = FakeOrderRepository(store)
        self.products = FakeProductRepository(store)
        self.payments = FakePaymentRepository(store)
        self.shipments = FakeShipmentRepository(store)
        self.catalogue = FakeCatalogueRepository(store)
        self.committed = False

    async def commit(self):
        self.committed = True

    async def rollback(self):
        pass


class FakeUnitOfWork:
    def __init__(self, store: InMemoryStore):
        self._store = store

    @asynccontextmanager
    async def __call__(self):
        yield _FakeUnitOfWorkImpl(self._store)


class FakeAccountsService:
    def __init__(self, accounts=None):
        self.accounts: dict[str, Account] = {a.id: a for a in (accounts or [])}

    async def get_account(self, user_id):
        return self.accounts.get(user_id)


class FakeCartsService:
    def __init__(self, carts=None):
        self.carts: dict[str, Cart] = {c.user_id: c for c in (carts or [])}
        self.emptied: list[str] = []
        self.fail_empty = False

    async def get_cart(self, user_id):
        return self.carts.get(user_id) or Cart(id="", user_id=user_id)

    async def empty(self, cart_id):
        if self.fail_empty:
            raise RuntimeError("carts service down")
        self.emptied.append(cart_id)
        for cart in self.carts.values():
            if cart.id == cart_id:
                cart.items = []


@pytest.fixture
def product_a():
    return Product(id="A", name="Product A", price=Decimal("10"))


@pytest.fixture
def product_b():
    return Product(id="B", name="Product B", price=Decimal("5"))


@pytest.fixture
def store(product_a, product_b):
    store = InMemoryStore()
    store.products = {product_a.id: product_a, product_b.id: product_b}
    store.stock = {"A": 5, "B": 5}
    return store


@pytest.fixture
def uow(store):
    return FakeUnitOfWork(store)


@pytest.fixture
def user():
    return Account(id="U", email="u@example.com", address="1 Main St", cart_id="cart-U")


@pytest.fixture
def accounts(user):
    return FakeAccountsService([user])


@pytest.fixture
def carts(user, product_a, product_b):
    cart = Cart(
        id="cart-U",
        user_id=user.id,
        items=[
            CartItem(product=product_a, quantity=2),
            CartItem(product=product_b, quantity=1),
        ],
    )
    return FakeCartsService([cart])
