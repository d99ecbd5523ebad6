"""
catalog.models.store
"""
from django.db import models


class Store(models.Model):
    store_id = models.CharField(max_length=20, unique=True)
    address = models.CharField(max_length=200, blank=True, default="")
    city = models.CharField(max_length=100, blank=True, default="")
    state = models.CharField(max_length=50, blank=True, default="")
    is_open = models.BooleanField(default=True, db_index=True)
    review_score = models.DecimalField(max_digits=3, decimal_places=1, null=True, blank=True)

    class Meta:
        ordering = ("store_id",)

    def __str__(self) -> str:
        return f"{self.store_id} {self.address}, {self.city}, {self.state}"
