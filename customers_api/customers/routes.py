from fastapi import APIRouter, Body, Depends, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from typing import List, Optional
import logging
import uuid

from customers_api.config import Config
from customers_api.customers.endpoint import CustomerEndpoint, request_error
from customers_api.customers.results import ErrorKind
from customers_api.customers.schemas import CustomerInfo, CustomerInput
from customers_api.customers.store import CustomerStore, InMemoryCustomerStore, SqlCustomerStore
from customers_api.db.main import async_session_maker
from customers_api.messages.catalog import MessageCatalog, get_message_catalog


customer_router = APIRouter()

# Shared across requests when CUSTOMER_STORE is "memory"
memory_store = InMemoryCustomerStore()


async def get_customer_store():
    if Config.CUSTOMER_STORE == "memory":
        yield memory_store
        return

    # A session is only opened for the sql store
    async with async_session_maker() as session:
        yield SqlCustomerStore(session)


def get_endpoint_logger() -> logging.Logger:
    return logging.getLogger(CustomerEndpoint.__module__)


def get_customer_endpoint(
    store: CustomerStore = Depends(get_customer_store),
    catalog: MessageCatalog = Depends(get_message_catalog),
) -> CustomerEndpoint:
    return CustomerEndpoint(store, catalog, get_endpoint_logger())


@customer_router.get("", response_model=List[CustomerInfo], status_code=status.HTTP_200_OK)
async def get_all_customers(endpoint: CustomerEndpoint = Depends(get_customer_endpoint)):
    return await endpoint.list_customers()


@customer_router.get("/{id}", response_model=CustomerInfo, status_code=status.HTTP_200_OK)
async def get_customer(
    id: uuid.UUID,
    endpoint: CustomerEndpoint = Depends(get_customer_endpoint)
):
    return await endpoint.get_customer(id)


@customer_router.post("", response_model=CustomerInfo, status_code=status.HTTP_200_OK)
async def create_customer(
    customer: Optional[CustomerInput] = Body(default=None),
    endpoint: CustomerEndpoint = Depends(get_customer_endpoint)
):
    return await endpoint.create_customer(customer)


@customer_router.put("/{id}", response_model=CustomerInfo, status_code=status.HTTP_200_OK)
async def update_customer(
    id: uuid.UUID,
    customer: Optional[CustomerInput] = Body(default=None),
    endpoint: CustomerEndpoint = Depends(get_customer_endpoint)
):
    return await endpoint.update_customer(id, customer)


@customer_router.delete("/{id}", response_model=CustomerInfo, status_code=status.HTTP_200_OK)
async def delete_customer(
    id: uuid.UUID,
    endpoint: CustomerEndpoint = Depends(get_customer_endpoint)
):
    return await endpoint.delete_customer(id)


# Route function -> CustomerEndpoint method it delegates to
ENDPOINT_METHODS = {
    get_all_customers: "list_customers",
    get_customer: "get_customer",
    create_customer: "create_customer",
    update_customer: "update_customer",
    delete_customer: "delete_customer",
}


def reject_malformed_request(request: Request, exc: RequestValidationError) -> Optional[HTTPException]:
    """Translate a framework validation failure on a customer route.

    A body that is not JSON or does not fit ``CustomerInput`` is invalid
    customer information (400). A path id that is not a UUID cannot name
    any customer (404). Body errors win when both are present. Returns
    None for requests that did not reach a customer route.
    """
    method_name = ENDPOINT_METHODS.get(request.scope.get("endpoint"))
    if method_name is None:
        return None

    locations = {err["loc"][0] for err in exc.errors() if err.get("loc")}
    catalog_factory = request.app.dependency_overrides.get(get_message_catalog, get_message_catalog)
    catalog = catalog_factory()
    logger = get_endpoint_logger()

    if "body" in locations:
        return request_error(catalog, logger, method_name, ErrorKind.INVALID, "CustomerInfoInvalid")
    if "path" in locations:
        return request_error(
            catalog, logger, method_name, ErrorKind.NOT_FOUND, "CustomerNotFound",
            request.path_params.get("id")
        )
    return None
