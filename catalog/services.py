"""
catalog.services

Manager-only catalog maintenance (edit an item field, add an item).
"""

from __future__ import annotations

import logging
from typing import Optional

from django.db import IntegrityError, transaction

from accounts.access import Action, ensure_allowed
from catalog.models import Item
from catalog.query import parse_price
from pizzastore.db import store_errors
from pizzastore.exceptions import ItemNotFound, ValidationError

logger = logging.getLogger(__name__)

ITEM_FIELDS = ("name", "ingredients", "item_type", "price", "description")


def get_item(name: str) -> Item:
    with store_errors("catalog.get_item"):
        item = Item.objects.filter(name=(name or "").strip()).first()
    if item is None:
        raise ItemNotFound(f"Item '{name}' is not on the menu.")
    return item


def _clean_field(field: str, value: Optional[str]):
    if field == "price":
        return parse_price(value)
    if field == "name":
        name = (value or "").strip()
        if not name:
            raise ValidationError("Item name cannot be empty.")
        return name
    if field in ("ingredients", "item_type", "description"):
        return (value or "").strip()
    raise ValidationError("Please enter a valid choice.")


def add_item(
    requester,
    name: str,
    price,
    item_type: str = "",
    ingredients: str = "",
    description: str = "",
) -> Item:
    ensure_allowed(requester.role, Action.UPDATE_CATALOG)
    values = {
        "name": _clean_field("name", name),
        "price": _clean_field("price", price),
        "item_type": _clean_field("item_type", item_type),
        "ingredients": _clean_field("ingredients", ingredients),
        "description": _clean_field("description", description),
    }
    with store_errors("catalog.add_item"):
        try:
            with transaction.atomic():
                item = Item.objects.create(**values)
        except IntegrityError:
            raise ValidationError(f"Item '{values['name']}' already exists.")

    logger.info(
        "catalog_item_added",
        extra={"event": "catalog_item_added", "by": requester.login, "item": item.name},
    )
    return item


def update_item(requester, name: str, field: str, value: Optional[str]) -> Item:
    ensure_allowed(requester.role, Action.UPDATE_CATALOG)
    if field not in ITEM_FIELDS:
        raise ValidationError("Please enter a valid choice.")
    cleaned = _clean_field(field, value)
    item = get_item(name)

    with store_errors("catalog.update_item"):
        try:
            with transaction.atomic():
                Item.objects.filter(pk=item.pk).update(**{field: cleaned})
        except IntegrityError:
            raise ValidationError(f"Item '{cleaned}' already exists.")
    setattr(item, field, cleaned)

    logger.info(
        "catalog_item_updated",
        extra={"event": "catalog_item_updated", "by": requester.login, "item": item.name, "field": field},
    )
    return item
