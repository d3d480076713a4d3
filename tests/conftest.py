# tests/conftest.py
from __future__ import annotations

import os

# Must be set before the app package reads its configuration
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("CUSTOMER_STORE", "memory")

import logging
import uuid

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from customers_api import app
from customers_api.customers.endpoint import CustomerEndpoint
from customers_api.customers.results import CustomerStoreError, ErrorKind, OperationResult
from customers_api.customers.routes import get_customer_store
from customers_api.customers.store import InMemoryCustomerStore, SqlCustomerStore
from customers_api.messages.catalog import MessageCatalog


ENDPOINT_LOGGER = "customers_api.customers.endpoint"


class RecordingStore(InMemoryCustomerStore):
    """In-memory store that records calls and can be told to fail reads or writes."""

    def __init__(self):
        super().__init__()
        self.calls: list[str] = []
        self.fail_reads = False
        self.fail_writes = False

    async def list(self):
        self.calls.append("list")
        if self.fail_reads:
            raise CustomerStoreError("list failed")
        return await super().list()

    async def find(self, customer_id: uuid.UUID):
        self.calls.append("find")
        if self.fail_reads:
            return OperationResult.fail(ErrorKind.STORE_FAILURE)
        return await super().find(customer_id)

    async def exists(self, customer_id: uuid.UUID):
        self.calls.append("exists")
        if self.fail_reads:
            raise CustomerStoreError("exists failed")
        return await super().exists(customer_id)

    async def add(self, customer_input):
        self.calls.append("add")
        if self.fail_writes:
            return OperationResult.fail(ErrorKind.STORE_FAILURE)
        return await super().add(customer_input)

    async def update(self, customer_id, customer_input):
        self.calls.append("update")
        if self.fail_writes:
            return OperationResult.fail(ErrorKind.STORE_FAILURE)
        return await super().update(customer_id, customer_input)

    async def delete(self, customer_id):
        self.calls.append("delete")
        if self.fail_writes:
            return OperationResult.fail(ErrorKind.STORE_FAILURE)
        return await super().delete(customer_id)


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def catalog() -> MessageCatalog:
    return MessageCatalog.load("en")


@pytest.fixture
def store() -> RecordingStore:
    return RecordingStore()


@pytest.fixture
def endpoint(store, catalog) -> CustomerEndpoint:
    return CustomerEndpoint(store, catalog, logging.getLogger(ENDPOINT_LOGGER))


@pytest.fixture
def client(store):
    app.dependency_overrides[get_customer_store] = lambda: store
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


class BrokenSession:
    """Stands in for an ``AsyncSession`` whose database is unreachable."""

    def __init__(self):
        self.rollbacks = 0

    @staticmethod
    def _unreachable():
        return OperationalError("SELECT", {}, Exception("database is unreachable"))

    async def exec(self, statement):
        raise self._unreachable()

    async def get(self, model, ident):
        raise self._unreachable()

    def add(self, instance):
        pass

    async def commit(self):
        raise self._unreachable()

    async def rollback(self):
        self.rollbacks += 1


@pytest.fixture
def broken_session() -> BrokenSession:
    return BrokenSession()


@pytest.fixture
def broken_client(broken_session):
    """Client whose customer routes run against a ``SqlCustomerStore`` with no database."""
    app.dependency_overrides[get_customer_store] = lambda: SqlCustomerStore(broken_session)
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
