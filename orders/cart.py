"""
orders.cart

Cart Accumulator: the order-in-progress held in session memory.

Nothing here writes to the database until `submit()`, which hands the
finalized (store, lines, total) to orders.services.create_order. A failed
submit leaves the cart as it was so the user can retry. A total that no longer
matches the menu (a price changed after an item was added) is rejected there.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, List, Optional, Tuple

from catalog.models import Item, Store
from orders.services import MAX_QUANTITY, check_total, create_order, parse_quantity
from pizzastore.db import store_errors
from pizzastore.exceptions import InvalidQuantity, ItemNotFound, StoreNotFound, ValidationError

ZERO = Decimal("0.00")


@dataclass(frozen=True)
class CartLine:
    item_name: str
    quantity: int


class Cart:
    def __init__(self):
        self._store: Optional[Store] = None
        self._lines: Dict[str, int] = {}  # item name -> quantity, insertion ordered
        self._total: Decimal = ZERO

    # ---- read side ----
    @property
    def store_id(self) -> Optional[str]:
        return self._store.store_id if self._store else None

    @property
    def lines(self) -> List[CartLine]:
        return [CartLine(name, qty) for name, qty in self._lines.items()]

    @property
    def total(self) -> Decimal:
        return self._total

    @property
    def is_empty(self) -> bool:
        return not self._lines

    # ---- write side ----
    def select_store(self, store_id: str) -> Store:
        """Items may only be added once an existing, open store is selected."""
        sid = (store_id or "").strip()
        if not sid:
            raise ValidationError("Please enter a store ID.")
        with store_errors("cart.select_store"):
            store = Store.objects.filter(store_id=sid, is_open=True).first()
        if store is None:
            self._store = None
            raise StoreNotFound(f"Store '{sid}' does not exist or is closed.")
        self._store = store
        return store

    def add_item(self, name: str, quantity) -> CartLine:
        """
        Merge `quantity` of `name` into the cart. The price is looked up now and
        only this increment is priced with it.
        """
        if self._store is None:
            raise ValidationError("Please select a store first.")
        qty = parse_quantity(quantity)
        with store_errors("cart.add_item"):
            item = Item.objects.filter(name=(name or "").strip()).first()
        if item is None:
            raise ItemNotFound(f"Item '{name}' is not on the menu.")

        merged = self._lines.get(item.name, 0) + qty
        if merged > MAX_QUANTITY:
            raise InvalidQuantity()
        total = check_total(self._total + item.price * qty)

        self._lines[item.name] = merged
        self._total = total
        return CartLine(item.name, self._lines[item.name])

    def cancel(self) -> None:
        self._store = None
        self._lines = {}
        self._total = ZERO

    def as_submission(self) -> Tuple[str, List[Tuple[str, int]], Decimal]:
        return self.store_id, list(self._lines.items()), self._total

    def submit(self, owner):
        if self._store is None:
            raise ValidationError("Please select a store first.")
        if self.is_empty:
            raise ValidationError("Your cart is empty.")
        store_id, lines, total = self.as_submission()
        order = create_order(owner, store_id, lines, total)
        self.cancel()
        return order
