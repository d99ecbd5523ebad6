from rest_framework import serializers

from orders.models import Order
from orders.services import SCOPE_OWN, SCOPES


class OrderSerializer(serializers.ModelSerializer):
    owner = serializers.SlugRelatedField(slug_field="login", read_only=True)
    store = serializers.SlugRelatedField(slug_field="store_id", read_only=True)

    class Meta:
        model = Order
        fields = ("order_id", "owner", "store", "total_price", "created_at", "status")


class OrderLineInputSerializer(serializers.Serializer):
    item = serializers.CharField(max_length=50)
    # parsed by the cart so "0" and "abc" get the same message as the console
    quantity = serializers.CharField(max_length=20)


class OrderCreateSerializer(serializers.Serializer):
    store_id = serializers.CharField(max_length=20)
    lines = OrderLineInputSerializer(many=True)


class OrderListQuerySerializer(serializers.Serializer):
    scope = serializers.ChoiceField(choices=SCOPES, required=False, default=SCOPE_OWN)
    limit = serializers.IntegerField(min_value=1, required=False)


class OrderStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Order.STATUSES)


def detail_payload(detail):
    return {
        "order_id": detail.order_id,
        "created_at": serializers.DateTimeField().to_representation(detail.created_at),
        "total_price": str(detail.total_price),
        "status": detail.status,
        "store_id": detail.store_id,
        "owner": detail.owner_login,
        "lines": [{"item": line.item_name, "quantity": line.quantity} for line in detail.lines],
    }
