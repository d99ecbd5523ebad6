from django.urls import path

from orders.views import OrderDetailView, OrderListView, OrderStatusView

urlpatterns = [
    path("", OrderListView.as_view(), name="orders-list"),
    path("<int:order_id>/", OrderDetailView.as_view(), name="orders-detail"),
    path("<int:order_id>/status/", OrderStatusView.as_view(), name="orders-status"),
]
