from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.access import Action, ensure_allowed
from catalog.query import SORT_NONE, build_query, list_stores, run_query
from catalog.serializers import (
    ItemCreateSerializer,
    ItemFieldUpdateSerializer,
    ItemSerializer,
    StoreSerializer,
)
from catalog.services import add_item, update_item


class ItemListView(APIView):
    """
    GET  /api/catalog/items/?max_price=10&type=entree&sort=asc
    POST /api/catalog/items/      (manager)
    """

    def get(self, request, *args, **kwargs):
        ensure_allowed(request.user.role, Action.VIEW_CATALOG)
        params = request.query_params
        query = build_query(
            max_price=params.get("max_price") or None,
            type_filter=params.get("type"),
            sort=params.get("sort") or SORT_NONE,
        )
        items = run_query(query)
        return Response(
            {"query": query.describe(), "items": ItemSerializer(items, many=True).data},
            status=status.HTTP_200_OK,
        )

    def post(self, request, *args, **kwargs):
        ser = ItemCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        item = add_item(request.user, **ser.validated_data)
        return Response(ItemSerializer(item).data, status=status.HTTP_201_CREATED)


class ItemDetailView(APIView):
    """PATCH /api/catalog/items/{name}/  body: {"field": "price", "value": "12.50"}  (manager)"""

    def patch(self, request, name, *args, **kwargs):
        ser = ItemFieldUpdateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        item = update_item(request.user, name, ser.validated_data["field"], ser.validated_data["value"])
        return Response(ItemSerializer(item).data, status=status.HTTP_200_OK)


class StoreListView(APIView):
    """GET /api/catalog/stores/"""

    def get(self, request, *args, **kwargs):
        ensure_allowed(request.user.role, Action.VIEW_STORES)
        return Response(StoreSerializer(list_stores(), many=True).data, status=status.HTTP_200_OK)
