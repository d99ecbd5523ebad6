# pizzastore/urls.py
"""
CHANGE LOG
----------
2026-09-20
- ADD: /api/accounts/, /api/catalog/, /api/orders/ includes (DRF).
- ADD: /health/ liveness check (no auth, no DB).
"""

from django.contrib import admin
from django.http import JsonResponse
from django.urls import path, include


def health_view(request):
    """Liveness check."""
    return JsonResponse({"ok": True})


urlpatterns = [
    path("admin/", admin.site.urls),
    path("health/", health_view, name="health"),
    path("api/accounts/", include("accounts.urls")),
    path("api/catalog/", include("catalog.urls")),
    path("api/orders/", include("orders.urls")),
]
