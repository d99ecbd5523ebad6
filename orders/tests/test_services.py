from datetime import timedelta
from decimal import Decimal
from unittest import mock

from django.db import IntegrityError
from django.test import TestCase, override_settings
from django.utils import timezone

from accounts.models import ROLE_DRIVER, ROLE_MANAGER, User
from catalog.models import Item, Store
from orders.models import Order, OrderLine
from orders.services import (
    MAX_ORDER_TOTAL,
    MAX_QUANTITY,
    SCOPE_ALL,
    SCOPE_OWN,
    SCOPE_OWN_RECENT,
    SCOPE_RECENT,
    create_order,
    get_order_detail,
    list_orders,
    parse_order_id,
    update_status,
)
from pizzastore.exceptions import (
    ForbiddenError,
    InvalidQuantity,
    ItemNotFound,
    OrderNotFound,
    StoreError,
    StoreNotFound,
    ValidationError,
)


class OrderFixtures(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.alice = User.objects.create_user(login="alice", password="pw1")
        cls.bob = User.objects.create_user(login="bob", password="pw2")
        cls.dana = User.objects.create_user(login="dana", password="d", role=ROLE_DRIVER)
        cls.maria = User.objects.create_user(login="maria", password="m", role=ROLE_MANAGER)
        cls.s1 = Store.objects.create(store_id="S1", address="100 Main St", city="Riverside", state="CA")
        cls.s3 = Store.objects.create(store_id="S3", address="9 Mission Blvd", city="Ontario", state="CA", is_open=False)
        cls.pepperoni = Item.objects.create(name="Pepperoni", item_type="entree", price=Decimal("9.99"))
        cls.soda = Item.objects.create(name="Soda", item_type=" drinks", price=Decimal("1.50"))

    def place(self, owner, **kwargs):
        return create_order(
            owner,
            kwargs.get("store_id", "S1"),
            kwargs.get("lines", [("Pepperoni", 2), ("Soda", 1)]),
            kwargs.get("total", Decimal("21.48")),
        )


class CreateOrderTests(OrderFixtures):
    def test_alice_orders_pepperoni_and_soda(self):
        order = self.place(self.alice)
        order.refresh_from_db()
        self.assertEqual(order.total_price, Decimal("21.48"))
        self.assertEqual(order.status, Order.STATUS_INCOMPLETE)
        self.assertEqual(order.owner, self.alice)
        self.assertEqual(
            [(line.item.name, line.quantity) for line in order.lines.all()],
            [("Pepperoni", 2), ("Soda", 1)],
        )
        self.assertGreaterEqual(order.order_id, 1)

    def test_repeated_items_are_merged_into_one_line(self):
        order = self.place(self.alice, lines=[("Soda", 1), ("Soda", 2)], total=Decimal("4.50"))
        self.assertEqual(list(order.lines.values_list("quantity", flat=True)), [3])

    def test_empty_lines_rejected(self):
        with self.assertRaises(ValidationError):
            self.place(self.alice, lines=[])
        self.assertFalse(Order.objects.exists())

    def test_unknown_store_or_item(self):
        with self.assertRaises(StoreNotFound):
            self.place(self.alice, store_id="S3")
        with self.assertRaises(StoreNotFound):
            self.place(self.alice, store_id="S404")
        with self.assertRaises(ItemNotFound):
            self.place(self.alice, lines=[("Calzone", 1)])
        self.assertFalse(Order.objects.exists())

    def test_quantities_past_the_column_are_rejected(self):
        with self.assertRaises(InvalidQuantity):
            self.place(self.alice, lines=[("Soda", "9" * 30)], total=Decimal("1.50"))
        with self.assertRaises(InvalidQuantity):
            self.place(self.alice, lines=[("Soda", MAX_QUANTITY), ("Soda", 1)], total=Decimal("1.50"))
        self.assertFalse(Order.objects.exists())

    def test_total_must_be_a_storable_amount(self):
        for total in ("1e30", "abc", "NaN", "-1", MAX_ORDER_TOTAL + 1):
            with self.assertRaises(ValidationError):
                self.place(self.alice, total=total)
        self.assertFalse(Order.objects.exists())

    def test_total_must_match_the_lines(self):
        with self.assertRaises(ValidationError):
            self.place(self.alice, lines=[("Soda", 1)], total=Decimal("99.00"))
        with self.assertRaises(ValidationError):
            self.place(self.alice, total=Decimal("0"))
        self.assertFalse(Order.objects.exists())

    def test_line_failure_rolls_back_the_order_row(self):
        with mock.patch.object(OrderLine.objects, "create", side_effect=IntegrityError("line insert failed")):
            with self.assertRaises(StoreError):
                self.place(self.alice)
        self.assertFalse(Order.objects.exists())
        self.assertFalse(OrderLine.objects.exists())

    def test_identifier_collision_is_retried(self):
        taken = Order.objects.create(order_id=42, owner=self.bob, store=self.s1, total_price=Decimal("1.50"))
        with mock.patch("orders.identifiers.generate_order_id", side_effect=[42, 43]):
            order = self.place(self.alice)
        self.assertEqual(order.order_id, 43)
        taken.refresh_from_db()
        self.assertEqual(taken.owner, self.bob)
        self.assertEqual(Order.objects.count(), 2)

    @override_settings(PIZZASTORE={"ORDER_ID_MAX_TRIES": 3})
    def test_identifier_exhaustion_is_a_store_error(self):
        Order.objects.create(order_id=7, owner=self.bob, store=self.s1, total_price=Decimal("1.50"))
        with mock.patch("orders.identifiers.generate_order_id", return_value=7) as gen:
            with self.assertRaises(StoreError):
                self.place(self.alice)
        self.assertEqual(gen.call_count, 3)
        self.assertEqual(Order.objects.count(), 1)


class UpdateStatusTests(OrderFixtures):
    def test_complete_twice_is_fine(self):
        order = self.place(self.alice)
        update_status(self.maria, order.order_id, "complete")
        update_status(self.maria, order.order_id, "complete")
        self.assertEqual(Order.objects.get(pk=order.pk).status, Order.STATUS_COMPLETE)

    def test_driver_may_reopen(self):
        order = self.place(self.alice)
        update_status(self.dana, order.order_id, "complete")
        update_status(self.dana, str(order.order_id), "incomplete")
        self.assertEqual(Order.objects.get(pk=order.pk).status, Order.STATUS_INCOMPLETE)

    def test_customer_cannot_update(self):
        order = self.place(self.alice)
        with self.assertRaises(ForbiddenError):
            update_status(self.alice, order.order_id, "complete")

    def test_invalid_status_or_missing_order(self):
        order = self.place(self.alice)
        with self.assertRaises(ValidationError):
            update_status(self.maria, order.order_id, "delivered")
        with self.assertRaises(OrderNotFound):
            missing = 1 if order.order_id != 1 else 2
            update_status(self.maria, missing, "complete")


class OrderDetailTests(OrderFixtures):
    def test_scenario_owner_manager_and_stranger(self):
        order = self.place(self.alice)
        update_status(self.maria, order.order_id, "complete")

        detail = get_order_detail(self.alice, order.order_id)
        self.assertEqual(detail.status, "complete")
        self.assertEqual(detail.total_price, Decimal("21.48"))
        self.assertEqual(detail.store_id, "S1")
        self.assertEqual(detail.owner_login, "alice")
        self.assertEqual([(line.item_name, line.quantity) for line in detail.lines], [("Pepperoni", 2), ("Soda", 1)])

        self.assertEqual(get_order_detail(self.dana, order.order_id).order_id, order.order_id)

        with self.assertRaises(OrderNotFound):
            get_order_detail(self.bob, order.order_id)

    def test_prices_are_a_snapshot(self):
        order = self.place(self.alice)
        Item.objects.filter(pk=self.pepperoni.pk).update(price=Decimal("15.00"))
        self.assertEqual(get_order_detail(self.alice, order.order_id).total_price, Decimal("21.48"))

    def test_parse_order_id(self):
        self.assertEqual(parse_order_id(" 12 "), 12)
        with self.assertRaises(ValidationError):
            parse_order_id("twelve")
        with self.assertRaises(OrderNotFound):
            parse_order_id("0")
        with self.assertRaises(OrderNotFound):
            parse_order_id(str(2**64))


class ListOrdersTests(OrderFixtures):
    def setUp(self):
        now = timezone.now()
        self.ids = {"alice": [], "bob": []}
        for i in range(7):
            owner = self.alice if i % 2 == 0 else self.bob
            order = Order.objects.create(
                order_id=1000 + i,
                owner=owner,
                store=self.s1,
                total_price=Decimal("1.50"),
                created_at=now - timedelta(minutes=10 * (7 - i)),
            )
            self.ids[owner.login].append(order.order_id)

    def test_customer_sees_only_own_orders_newest_first(self):
        for scope in (SCOPE_ALL, SCOPE_OWN):
            ids = [o.order_id for o in list_orders(self.alice, scope)]
            self.assertEqual(ids, sorted(self.ids["alice"], reverse=True))

    def test_customer_recent_is_limited_to_own(self):
        ids = [o.order_id for o in list_orders(self.bob, SCOPE_RECENT)]
        self.assertEqual(ids, sorted(self.ids["bob"], reverse=True))
        ids = [o.order_id for o in list_orders(self.alice, SCOPE_OWN_RECENT, limit=2)]
        self.assertEqual(ids, [1006, 1004])

    def test_staff_see_everything(self):
        ids = [o.order_id for o in list_orders(self.dana, SCOPE_ALL)]
        self.assertEqual(ids, list(range(1006, 999, -1)))

    def test_recent_defaults_to_configured_limit(self):
        ids = [o.order_id for o in list_orders(self.maria, SCOPE_RECENT)]
        self.assertEqual(ids, [1006, 1005, 1004, 1003, 1002])

    def test_unknown_scope(self):
        with self.assertRaises(ValidationError):
            list_orders(self.maria, "yesterday")
