"""Customer persistence.

``CustomerStore`` is the interface the endpoint talks to. Two
implementations are provided: ``SqlCustomerStore`` persists through an
async SQLModel session, ``InMemoryCustomerStore`` keeps customers in a
dict for local runs and tests.

Write operations and ``find`` never raise for persistence problems; they
return an ``OperationResult`` whose ``error_kind`` tells the caller what
went wrong. ``list`` and ``exists`` raise ``CustomerStoreError`` instead.
"""

import asyncio
import logging
import uuid
from typing import Dict, List, Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from customers_api.customers.models import Customer
from customers_api.customers.results import CustomerStoreError, ErrorKind, OperationResult
from customers_api.customers.schemas import CustomerInput

logger = logging.getLogger(__name__)


class CustomerStore(Protocol):

    async def list(self) -> List[Customer]: ...

    async def find(self, customer_id: uuid.UUID) -> OperationResult: ...

    async def exists(self, customer_id: uuid.UUID) -> bool: ...

    async def add(self, customer_input: CustomerInput) -> OperationResult: ...

    async def update(self, customer_id: uuid.UUID, customer_input: CustomerInput) -> OperationResult: ...

    async def delete(self, customer_id: uuid.UUID) -> OperationResult: ...


def _profile_fields(customer_input: CustomerInput) -> dict:
    return customer_input.model_dump(include={"first_name", "last_name", "email", "phone"})


class SqlCustomerStore:
    """Store backed by an ``AsyncSession``; one instance per request."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list(self) -> List[Customer]:
        statement = select(Customer).order_by(Customer.created_at)

        try:
            result = await self.session.exec(statement)
            return list(result.all())
        except SQLAlchemyError as e:
            logger.exception("Failed to list customers")
            await self.session.rollback()
            raise CustomerStoreError("Failed to list customers") from e

    async def find(self, customer_id: uuid.UUID) -> OperationResult:
        try:
            customer = await self.session.get(Customer, customer_id)
        except SQLAlchemyError:
            logger.exception("Failed to load customer %s", customer_id)
            await self.session.rollback()
            return OperationResult.fail(ErrorKind.STORE_FAILURE)

        if not customer:
            return OperationResult.fail(ErrorKind.NOT_FOUND)

        return OperationResult.ok(customer)

    async def exists(self, customer_id: uuid.UUID) -> bool:
        statement = select(Customer.id).where(Customer.id == customer_id)

        try:
            result = await self.session.exec(statement)
            return result.first() is not None
        except SQLAlchemyError as e:
            logger.exception("Failed to check customer %s", customer_id)
            await self.session.rollback()
            raise CustomerStoreError(f"Failed to check customer {customer_id}") from e

    async def add(self, customer_input: CustomerInput) -> OperationResult:
        new_customer = Customer(**_profile_fields(customer_input))

        self.session.add(new_customer)

        try:
            await self.session.commit()

            # Reload so generated fields are populated
            await self.session.refresh(new_customer)

            return OperationResult.ok(new_customer)
        except SQLAlchemyError:
            logger.exception("Failed to add customer")
            await self.session.rollback()
            return OperationResult.fail(ErrorKind.STORE_FAILURE)

    async def update(self, customer_id: uuid.UUID, customer_input: CustomerInput) -> OperationResult:
        try:
            customer = await self.session.get(Customer, customer_id)

            if not customer:
                return OperationResult.fail(ErrorKind.NOT_FOUND)

            for key, value in _profile_fields(customer_input).items():
                setattr(customer, key, value)

            await self.session.commit()
            await self.session.refresh(customer)
            return OperationResult.ok(customer)

        except SQLAlchemyError:
            logger.exception("Failed to update customer %s", customer_id)
            await self.session.rollback()
            return OperationResult.fail(ErrorKind.STORE_FAILURE)

    async def delete(self, customer_id: uuid.UUID) -> OperationResult:
        try:
            customer = await self.session.get(Customer, customer_id)

            if not customer:
                return OperationResult.fail(ErrorKind.NOT_FOUND)

            await self.session.delete(customer)
            await self.session.commit()
            return OperationResult.ok(customer)

        except SQLAlchemyError:
            logger.exception("Failed to delete customer %s", customer_id)
            await self.session.rollback()
            return OperationResult.fail(ErrorKind.STORE_FAILURE)


class InMemoryCustomerStore:
    """Process-local store. Callers always receive copies."""

    def __init__(self):
        self._customers: Dict[uuid.UUID, Customer] = {}
        self._lock = asyncio.Lock()

    @staticmethod
    def _copy(customer: Customer) -> Customer:
        return Customer(**customer.model_dump())

    async def list(self) -> List[Customer]:
        return [self._copy(customer) for customer in self._customers.values()]

    async def find(self, customer_id: uuid.UUID) -> OperationResult:
        customer = self._customers.get(customer_id)
        if customer is None:
            return OperationResult.fail(ErrorKind.NOT_FOUND)
        return OperationResult.ok(self._copy(customer))

    async def exists(self, customer_id: uuid.UUID) -> bool:
        return customer_id in self._customers

    async def add(self, customer_input: CustomerInput) -> OperationResult:
        customer = Customer(**_profile_fields(customer_input))
        async with self._lock:
            self._customers[customer.id] = customer
        return OperationResult.ok(self._copy(customer))

    async def update(self, customer_id: uuid.UUID, customer_input: CustomerInput) -> OperationResult:
        async with self._lock:
            current = self._customers.get(customer_id)
            if current is None:
                return OperationResult.fail(ErrorKind.NOT_FOUND)
            updated = Customer(
                id=current.id,
                created_at=current.created_at,
                **_profile_fields(customer_input),
            )
            self._customers[customer_id] = updated
        return OperationResult.ok(self._copy(updated))

    async def delete(self, customer_id: uuid.UUID) -> OperationResult:
        async with self._lock:
            customer = self._customers.pop(customer_id, None)
        if customer is None:
            return OperationResult.fail(ErrorKind.NOT_FOUND)
        return OperationResult.ok(customer)
