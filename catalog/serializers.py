from decimal import Decimal

from rest_framework import serializers

from catalog.models import Item, Store
from catalog.services import ITEM_FIELDS


class ItemSerializer(serializers.ModelSerializer):
    class Meta:
        model = Item
        fields = ("name", "item_type", "price", "ingredients", "description")


class StoreSerializer(serializers.ModelSerializer):
    class Meta:
        model = Store
        fields = ("store_id", "address", "city", "state", "is_open", "review_score")


class ItemCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=50)
    price = serializers.DecimalField(max_digits=8, decimal_places=2, min_value=Decimal("0"))
    item_type = serializers.CharField(max_length=40, required=False, allow_blank=True, default="")
    ingredients = serializers.CharField(required=False, allow_blank=True, default="")
    description = serializers.CharField(required=False, allow_blank=True, default="")


class ItemFieldUpdateSerializer(serializers.Serializer):
    field = serializers.ChoiceField(choices=ITEM_FIELDS)
    value = serializers.CharField(allow_blank=True)
