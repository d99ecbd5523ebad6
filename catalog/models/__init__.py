"""
Django imports this package as `catalog.models`.
"""
from .base import TimeStampedModel  # abstract
from .item import Item
from .store import Store

__all__ = [
    "TimeStampedModel",
    "Item",
    "Store",
]
