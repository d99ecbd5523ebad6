from django.contrib import admin
from .models import Order, OrderLine


class OrderLineInline(admin.TabularInline):
    model = OrderLine
    extra = 0
    readonly_fields = ("item", "quantity")
    can_delete = False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ('order_id', 'owner', 'store', 'total_price', 'status', 'created_at')
    list_filter = ('status', 'store', 'created_at')
    search_fields = ('order_id', 'owner__login')
    readonly_fields = ('order_id', 'owner', 'store', 'total_price', 'created_at')
    inlines = [OrderLineInline]
