from dataclasses import dataclass
from enum import Enum
from typing import Optional

from fastapi import status

from customers_api.customers.models import Customer


class ErrorKind(str, Enum):
    INVALID = "invalid"
    NOT_FOUND = "not_found"
    STORE_FAILURE = "store_failure"

    @property
    def status_code(self) -> int:
        return _STATUS_CODES[self]


_STATUS_CODES = {
    ErrorKind.INVALID: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.STORE_FAILURE: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


@dataclass(frozen=True)
class OperationResult:
    """Outcome of a store operation: either a customer or an error kind."""

    success: bool
    value: Optional[Customer] = None
    error_kind: Optional[ErrorKind] = None

    @classmethod
    def ok(cls, value: Customer) -> "OperationResult":
        return cls(success=True, value=value)

    @classmethod
    def fail(cls, error_kind: ErrorKind) -> "OperationResult":
        return cls(success=False, error_kind=error_kind)


class CustomerStoreError(Exception):
    """Raised by store reads that have no result type to report a failure with."""
