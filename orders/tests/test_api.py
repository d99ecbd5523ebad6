from decimal import Decimal

from django.test import TestCase

from accounts.models import ROLE_DRIVER, ROLE_MANAGER, User
from catalog.models import Item, Store
from orders.models import Order
from pizzastore.testing import basic_auth_client


class OrdersApiTests(TestCase):
    def setUp(self):
        User.objects.create_user(login="alice", password="pw1")
        User.objects.create_user(login="bob", password="pw2")
        User.objects.create_user(login="dana", password="d", role=ROLE_DRIVER)
        User.objects.create_user(login="maria", password="m", role=ROLE_MANAGER)
        Store.objects.create(store_id="S1", address="100 Main St", city="Riverside", state="CA")
        Item.objects.create(name="Pepperoni", item_type="entree", price=Decimal("9.99"))
        Item.objects.create(name="Soda", item_type=" drinks", price=Decimal("1.50"))
        self.alice = basic_auth_client("alice", "pw1")
        self.bob = basic_auth_client("bob", "pw2")

    def place(self, client=None):
        return (client or self.alice).post(
            "/api/orders/",
            {"store_id": "S1", "lines": [
                {"item": "Pepperoni", "quantity": 1},
                {"item": "Soda", "quantity": 1},
                {"item": "Pepperoni", "quantity": 1},
            ]},
            format="json",
        )

    def test_place_order_end_to_end(self):
        resp = self.place()
        self.assertEqual(resp.status_code, 201, resp.content)
        body = resp.json()
        self.assertEqual(body["total_price"], "21.48")
        self.assertEqual(body["status"], "incomplete")
        self.assertEqual(body["lines"], [{"item": "Pepperoni", "quantity": 2}, {"item": "Soda", "quantity": 1}])
        order_id = body["order_id"]

        resp = basic_auth_client("maria", "m").patch(
            f"/api/orders/{order_id}/status/", {"status": "complete"}, format="json"
        )
        self.assertEqual(resp.status_code, 200, resp.content)

        resp = self.alice.get(f"/api/orders/{order_id}/")
        self.assertEqual(resp.json()["status"], "complete")
        self.assertEqual(resp.json()["total_price"], "21.48")

        self.assertEqual(self.bob.get(f"/api/orders/{order_id}/").status_code, 404)

    def test_bad_quantity_or_closed_store(self):
        resp = self.alice.post(
            "/api/orders/", {"store_id": "S1", "lines": [{"item": "Soda", "quantity": 0}]}, format="json"
        )
        self.assertEqual(resp.status_code, 400)
        Store.objects.filter(store_id="S1").update(is_open=False)
        self.assertEqual(self.place().status_code, 404)
        self.assertFalse(Order.objects.exists())

    def test_quantity_past_the_column_is_400(self):
        resp = self.alice.post(
            "/api/orders/", {"store_id": "S1", "lines": [{"item": "Soda", "quantity": "9" * 19}]}, format="json"
        )
        self.assertEqual(resp.status_code, 400)
        self.assertFalse(Order.objects.exists())

    def test_customer_cannot_update_status(self):
        order_id = self.place().json()["order_id"]
        resp = self.alice.patch(f"/api/orders/{order_id}/status/", {"status": "complete"}, format="json")
        self.assertEqual(resp.status_code, 403)

    def test_list_scopes(self):
        self.place()
        self.place(self.bob)
        self.assertEqual(len(self.alice.get("/api/orders/", {"scope": "all"}).json()), 1)
        self.assertEqual(len(basic_auth_client("dana", "d").get("/api/orders/", {"scope": "all"}).json()), 2)
        self.assertEqual(self.alice.get("/api/orders/", {"scope": "everything"}).status_code, 400)

    def test_role_change_applies_on_next_request(self):
        order_id = self.place().json()["order_id"]
        dana = basic_auth_client("dana", "d")
        self.assertEqual(dana.get("/api/orders/", {"scope": "all"}).status_code, 200)
        User.objects.filter(login="dana").update(role="customer")
        self.assertEqual(dana.get(f"/api/orders/{order_id}/").status_code, 404)
