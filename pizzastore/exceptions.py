"""
pizzastore.exceptions

Error taxonomy shared by the services, the console session and the API.

- ValidationError: empty/malformed user input (re-prompt, no state change)
- NotFoundError:   referenced entity absent
- ForbiddenError:  role lacks permission for the requested action
- ConflictError:   identifier collision (retried internally, never surfaced)
- StoreError:      transport/query failure against the database
"""

from __future__ import annotations


class PizzaStoreError(Exception):
    """Base class; `message` is safe to show to the user."""

    default_message = "Something went wrong."

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(PizzaStoreError):
    default_message = "Invalid input."


class InvalidQuantity(ValidationError):
    default_message = "Quantity must be a whole number of at least 1."


class NotFoundError(PizzaStoreError):
    default_message = "Not found."


class ItemNotFound(NotFoundError):
    default_message = "Item not found."


class StoreNotFound(NotFoundError):
    default_message = "Store not found or closed."


class OrderNotFound(NotFoundError):
    default_message = "Order not found."


class UserNotFound(NotFoundError):
    default_message = "No user."


class ForbiddenError(PizzaStoreError):
    default_message = "You do not have permission to do that."


class ConflictError(PizzaStoreError):
    default_message = "Identifier collision."


class StoreError(PizzaStoreError):
    default_message = "The store is unavailable right now. Please try again later."
