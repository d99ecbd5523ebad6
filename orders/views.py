from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from orders.cart import Cart
from orders.serializers import (
    OrderCreateSerializer,
    OrderListQuerySerializer,
    OrderSerializer,
    OrderStatusSerializer,
    detail_payload,
)
from orders.services import get_order_detail, list_orders, update_status


class OrderListView(APIView):
    """
    GET  /api/orders/?scope=own_recent&limit=5
    POST /api/orders/   body: {"store_id": "S1", "lines": [{"item": "Pepperoni", "quantity": 2}]}

    POST runs the same cart the console uses: the store must be open, every
    item must exist, and the total is priced at submission time.
    """

    def get(self, request, *args, **kwargs):
        params = OrderListQuerySerializer(data=request.query_params)
        params.is_valid(raise_exception=True)
        orders = list_orders(
            request.user,
            scope=params.validated_data["scope"],
            limit=params.validated_data.get("limit"),
        )
        return Response(OrderSerializer(orders, many=True).data, status=status.HTTP_200_OK)

    def post(self, request, *args, **kwargs):
        ser = OrderCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        cart = Cart()
        cart.select_store(ser.validated_data["store_id"])
        for line in ser.validated_data["lines"]:
            cart.add_item(line["item"], line["quantity"])
        order = cart.submit(request.user)

        detail = get_order_detail(request.user, order.order_id)
        return Response(detail_payload(detail), status=status.HTTP_201_CREATED)


class OrderDetailView(APIView):
    """GET /api/orders/{order_id}/"""

    def get(self, request, order_id, *args, **kwargs):
        detail = get_order_detail(request.user, order_id)
        return Response(detail_payload(detail), status=status.HTTP_200_OK)


class OrderStatusView(APIView):
    """PATCH /api/orders/{order_id}/status/  body: {"status": "complete"}  (driver, manager)"""

    def patch(self, request, order_id, *args, **kwargs):
        ser = OrderStatusSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        order = update_status(request.user, order_id, ser.validated_data["status"])
        return Response(OrderSerializer(order).data, status=status.HTTP_200_OK)
