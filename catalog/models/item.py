"""
catalog.models.item
Orderable menu item. Catalog order is insertion order (primary key).
"""
from django.db import models
from django.db.models import Q

from .base import TimeStampedModel


class Item(TimeStampedModel):
    TYPE_ENTREE = "entree"
    TYPE_DRINKS = "drinks"
    TYPE_SIDES = "sides"
    # Suggestions only: the type column is open-ended text.
    KNOWN_TYPES = (TYPE_ENTREE, TYPE_DRINKS, TYPE_SIDES)

    name = models.CharField(max_length=50, unique=True)
    ingredients = models.TextField(blank=True, default="")
    item_type = models.CharField(
        max_length=40,
        blank=True,
        default="",
        db_index=True,
        help_text="Category tag, e.g. entree / drinks / sides.",
    )
    price = models.DecimalField(max_digits=8, decimal_places=2)
    description = models.TextField(blank=True, default="")

    class Meta:
        ordering = ("id",)
        constraints = [
            models.CheckConstraint(condition=Q(price__gte=0), name="catalog_item_price_non_negative"),
        ]

    def __str__(self) -> str:
        return f"{self.name} - ${self.price}"
