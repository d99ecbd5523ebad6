from django.urls import path

from catalog.views import ItemDetailView, ItemListView, StoreListView

urlpatterns = [
    path("items/", ItemListView.as_view(), name="catalog-items"),
    path("items/<str:name>/", ItemDetailView.as_view(), name="catalog-item-detail"),
    path("stores/", StoreListView.as_view(), name="catalog-stores"),
]
