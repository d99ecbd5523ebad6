from django.contrib import admin
from .models import Item, Store


@admin.register(Item)
class ItemAdmin(admin.ModelAdmin):
    list_display = ("name", "item_type", "price", "updated_at")
    list_filter = ("item_type",)
    search_fields = ("name", "ingredients", "description")


@admin.register(Store)
class StoreAdmin(admin.ModelAdmin):
    list_display = ("store_id", "address", "city", "state", "is_open", "review_score")
    list_filter = ("is_open", "state")
    search_fields = ("store_id", "address", "city")
