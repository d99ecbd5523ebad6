"""
catalog.query

Catalog Query Builder. A CatalogQuery is an immutable description of the
filters and ordering applied to the item collection; it is data, never SQL text.
The ORM turns it into a parameterized statement in `run_query()`.

    q = build_query(max_price=Decimal("10"), type_filter="entree")
    q = q.with_sort(SORT_DESC)
    items = run_query(q)
    q = q.cleared()          # back to the full catalog
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional

from catalog.models import Item, Store
from pizzastore.db import store_errors
from pizzastore.exceptions import ValidationError

SORT_NONE = "none"
SORT_ASC = "asc"
SORT_DESC = "desc"
SORT_CHOICES = (SORT_NONE, SORT_ASC, SORT_DESC)

# Item.price is DecimalField(max_digits=8, decimal_places=2)
MAX_PRICE = Decimal("999999.99")


def parse_price(raw: Any) -> Decimal:
    """
    Parse a user-supplied price into a non-negative Decimal with cent precision,
    no larger than MAX_PRICE. Raises ValidationError for anything else.
    """
    if isinstance(raw, bool):
        raise ValidationError("Please enter a valid price.")
    try:
        value = Decimal(str(raw).strip())
    except (InvalidOperation, ValueError):
        raise ValidationError("Please enter a valid price.")
    # bounded before quantize, which raises InvalidOperation past the context precision
    if not value.is_finite() or value < 0 or value > MAX_PRICE:
        raise ValidationError("Please enter a valid price.")
    return value.quantize(Decimal("0.01"))


@dataclass(frozen=True)
class CatalogQuery:
    max_price: Optional[Decimal] = None
    type_filter: Optional[str] = None
    sort: str = SORT_NONE

    def with_max_price(self, max_price: Optional[Decimal]) -> "CatalogQuery":
        return build_query(max_price, self.type_filter, self.sort)

    def with_type(self, type_filter: Optional[str]) -> "CatalogQuery":
        return build_query(self.max_price, type_filter, self.sort)

    def with_sort(self, sort: str) -> "CatalogQuery":
        return build_query(self.max_price, self.type_filter, sort)

    def cleared(self) -> "CatalogQuery":
        return replace(self, max_price=None, type_filter=None, sort=SORT_NONE)

    @property
    def is_filtered(self) -> bool:
        return self != CatalogQuery()

    def filters(self) -> Dict[str, Any]:
        """ORM lookups for the active filters."""
        lookups: Dict[str, Any] = {}
        if self.max_price is not None:
            lookups["price__lt"] = self.max_price
        if self.type_filter:
            # Substring match: stored types may carry a leading space.
            lookups["item_type__contains"] = self.type_filter
        return lookups

    def ordering(self) -> tuple:
        # Ties always fall back to catalog (insertion) order.
        if self.sort == SORT_ASC:
            return ("price", "id")
        if self.sort == SORT_DESC:
            return ("-price", "id")
        return ("id",)

    def describe(self) -> Dict[str, Any]:
        return {"filters": self.filters(), "ordering": list(self.ordering())}


def build_query(
    max_price: Optional[Any] = None,
    type_filter: Optional[str] = None,
    sort: Optional[str] = SORT_NONE,
) -> CatalogQuery:
    """
    Validate and compose the three independent filters.

    max_price: strict upper bound (None = unbounded)
    type_filter: substring of Item.item_type (blank = unset)
    sort: none | asc | desc
    """
    bound = None if max_price is None else parse_price(max_price)

    text = (type_filter or "").strip() or None

    order = (sort or SORT_NONE).strip().lower()
    if order not in SORT_CHOICES:
        raise ValidationError(f"Unknown sort order '{sort}'. Use one of: {', '.join(SORT_CHOICES)}.")

    return CatalogQuery(max_price=bound, type_filter=text, sort=order)


def run_query(query: CatalogQuery) -> List[Item]:
    """Execute the description. Store failures raise StoreError; `query` is untouched."""
    with store_errors("catalog.run_query"):
        return list(Item.objects.filter(**query.filters()).order_by(*query.ordering()))


def list_stores() -> List[Store]:
    with store_errors("catalog.list_stores"):
        return list(Store.objects.order_by("store_id"))
