"""Customer CRUD controller.

``CustomerEndpoint`` validates the request, makes a single call into the
``CustomerStore`` and turns the outcome into either the customer or an
``HTTPException`` carrying a message resolved from the ``MessageCatalog``.
Each step is logged with the calling method's name as prefix.
"""

import logging
import uuid
from typing import List, Optional

from fastapi import HTTPException

from customers_api.customers.models import Customer
from customers_api.customers.results import CustomerStoreError, ErrorKind
from customers_api.customers.schemas import CustomerInput
from customers_api.customers.store import CustomerStore
from customers_api.messages.catalog import MessageCatalog


def build_log_info(catalog: MessageCatalog, method_name: str, key: str, *args) -> str:
    return f"{method_name}: {catalog.resolve(key, *args)}"


def request_error(catalog: MessageCatalog, logger: logging.Logger,
                  method_name: str, error_kind: ErrorKind, key: str, *args) -> HTTPException:
    """Log an error line and build the matching HTTP error with the resolved message."""
    logger.error(build_log_info(catalog, method_name, key, *args))
    return HTTPException(
        status_code=error_kind.status_code,
        detail=catalog.resolve(key, *args)
    )


class CustomerEndpoint:

    def __init__(self, store: CustomerStore, catalog: MessageCatalog, logger: logging.Logger):
        self.store = store
        self.catalog = catalog
        self.logger = logger

    async def list_customers(self) -> List[Customer]:
        self.logger.info(self._log_info("list_customers", "LoggingGetCustomers"))

        try:
            return await self.store.list()
        except CustomerStoreError:
            self._fail("list_customers", ErrorKind.STORE_FAILURE, "UnexpectedServerError")

    async def get_customer(self, customer_id: uuid.UUID) -> Customer:
        self.logger.info(self._log_info("get_customer", "LoggingGetCustomer", customer_id))

        result = await self.store.find(customer_id)

        if not result.success:
            if result.error_kind == ErrorKind.NOT_FOUND:
                self._fail("get_customer", ErrorKind.NOT_FOUND, "CustomerNotFound", customer_id)
            self._fail("get_customer", ErrorKind.STORE_FAILURE, "UnexpectedServerError")

        return result.value

    async def create_customer(self, customer_input: Optional[CustomerInput]) -> Customer:
        if customer_input is None or not customer_input.is_valid():
            self._fail("create_customer", ErrorKind.INVALID, "CustomerInfoInvalid")

        customer_name = customer_input.full_name

        self.logger.info(self._log_info("create_customer", "LoggingAddingCustomer", customer_name))
        result = await self.store.add(customer_input)

        if not result.success:
            self._fail("create_customer", ErrorKind.STORE_FAILURE, "UnexpectedServerError")

        self.logger.info(self._log_info("create_customer", "LoggingAddedCustomer", customer_name))
        return result.value

    async def update_customer(self, customer_id: uuid.UUID, customer_input: Optional[CustomerInput]) -> Customer:
        if customer_input is None or not customer_input.is_valid():
            self._fail("update_customer", ErrorKind.INVALID, "CustomerInfoInvalid")

        self.logger.info(self._log_info("update_customer", "LoggingUpdatingCustomer", customer_id))

        if not await self._exists("update_customer", customer_id):
            self._fail("update_customer", ErrorKind.NOT_FOUND, "CustomerNotFound", customer_id)

        result = await self.store.update(customer_id, customer_input)

        if not result.success:
            self._fail("update_customer", ErrorKind.STORE_FAILURE, "UnexpectedServerError")

        self.logger.info(self._log_info("update_customer", "LoggingUpdatedCustomer", customer_id))
        return result.value

    async def delete_customer(self, customer_id: uuid.UUID) -> Customer:
        self.logger.info(self._log_info("delete_customer", "LoggingDeletingCustomer", customer_id))

        if not await self._exists("delete_customer", customer_id):
            self._fail("delete_customer", ErrorKind.NOT_FOUND, "CustomerNotFound", customer_id)

        result = await self.store.delete(customer_id)

        if not result.success:
            self._fail("delete_customer", ErrorKind.STORE_FAILURE, "UnexpectedServerError")

        self.logger.info(self._log_info("delete_customer", "LoggingDeletedCustomer", customer_id))
        return result.value

    async def _exists(self, method_name: str, customer_id: uuid.UUID) -> bool:
        try:
            return await self.store.exists(customer_id)
        except CustomerStoreError:
            self._fail(method_name, ErrorKind.STORE_FAILURE, "UnexpectedServerError")

    def _log_info(self, method_name: str, key: str, *args) -> str:
        return build_log_info(self.catalog, method_name, key, *args)

    def _fail(self, method_name: str, error_kind: ErrorKind, key: str, *args):
        raise request_error(self.catalog, self.logger, method_name, error_kind, key, *args)
