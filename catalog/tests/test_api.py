from decimal import Decimal

from django.test import TestCase

from accounts.models import ROLE_MANAGER, User
from catalog.models import Item, Store
from pizzastore.testing import basic_auth_client


class CatalogApiTests(TestCase):
    def setUp(self):
        User.objects.create_user(login="alice", password="pw1")
        User.objects.create_user(login="maria", password="m", role=ROLE_MANAGER)
        Item.objects.create(name="Pepperoni", item_type="entree", price=Decimal("9.99"))
        Item.objects.create(name="Veggie Supreme", item_type="entree", price=Decimal("11.25"))
        Item.objects.create(name="Soda", item_type=" drinks", price=Decimal("1.50"))
        Store.objects.create(store_id="S1", address="100 Main St", city="Riverside", state="CA")
        self.customer = basic_auth_client("alice", "pw1")
        self.manager = basic_auth_client("maria", "m")

    def test_filtered_items(self):
        resp = self.customer.get("/api/catalog/items/", {"max_price": "10", "type": "entree", "sort": "desc"})
        self.assertEqual(resp.status_code, 200, resp.content)
        self.assertEqual([i["name"] for i in resp.json()["items"]], ["Pepperoni"])
        self.assertEqual(resp.json()["query"]["ordering"], ["-price", "id"])

    def test_bad_sort_is_400(self):
        resp = self.customer.get("/api/catalog/items/", {"sort": "sideways"})
        self.assertEqual(resp.status_code, 400)

    def test_huge_max_price_is_400(self):
        resp = self.customer.get("/api/catalog/items/", {"max_price": "1e30"})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["error"], "Please enter a valid price.")

    def test_stores(self):
        resp = self.customer.get("/api/catalog/stores/")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()[0]["store_id"], "S1")

    def test_customer_cannot_add_items(self):
        resp = self.customer.post("/api/catalog/items/", {"name": "Calzone", "price": "12.00"}, format="json")
        self.assertEqual(resp.status_code, 403)
        self.assertFalse(Item.objects.filter(name="Calzone").exists())

    def test_manager_adds_and_updates(self):
        resp = self.manager.post(
            "/api/catalog/items/",
            {"name": "Calzone", "price": "12.00", "item_type": "entree"},
            format="json",
        )
        self.assertEqual(resp.status_code, 201, resp.content)

        resp = self.manager.patch("/api/catalog/items/Calzone/", {"field": "price", "value": "13.5"}, format="json")
        self.assertEqual(resp.status_code, 200, resp.content)
        self.assertEqual(Item.objects.get(name="Calzone").price, Decimal("13.50"))

    def test_update_missing_item_is_404(self):
        resp = self.manager.patch("/api/catalog/items/Nope/", {"field": "price", "value": "1"}, format="json")
        self.assertEqual(resp.status_code, 404)
