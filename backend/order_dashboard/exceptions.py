"""Errors raised by the order store."""

from typing import Any


class OrderStoreError(Exception):
    """Base exception for order store errors."""

    def __init__(self, message: str, **context: Any):
        super().__init__(message)
        self.message = message
        self.context = context


class OrderNotFound(OrderStoreError):
    """No order matches the normalized order number."""


class ValidationMissing(OrderStoreError):
    """A required field is absent on a mutating call."""


class StorageFailure(OrderStoreError):
    """The orders document could not be read or written."""
