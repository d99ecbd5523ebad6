from decimal import Decimal

from django.test import TestCase

from accounts.models import ROLE_DRIVER, ROLE_MANAGER, User
from catalog.models import Item
from catalog.services import add_item, get_item, update_item
from pizzastore.exceptions import ForbiddenError, ItemNotFound, ValidationError


class CatalogMaintenanceTests(TestCase):
    def setUp(self):
        self.manager = User.objects.create_user(login="maria", password="m", role=ROLE_MANAGER)
        self.driver = User.objects.create_user(login="dana", password="d", role=ROLE_DRIVER)
        self.soda = Item.objects.create(name="Soda", item_type=" drinks", price=Decimal("1.50"))

    def test_manager_adds_item(self):
        item = add_item(self.manager, "Calzone", "12.5", item_type="entree", ingredients="dough, ricotta")
        self.assertEqual(item.price, Decimal("12.50"))
        self.assertEqual(get_item("Calzone").item_type, "entree")

    def test_duplicate_name_is_rejected(self):
        with self.assertRaises(ValidationError):
            add_item(self.manager, "Soda", "2.00")
        self.assertEqual(Item.objects.filter(name="Soda").count(), 1)

    def test_negative_price_is_rejected(self):
        with self.assertRaises(ValidationError):
            add_item(self.manager, "Free Lunch", "-1")
        with self.assertRaises(ValidationError):
            update_item(self.manager, "Soda", "price", "-0.01")
        self.assertEqual(Item.objects.get(name="Soda").price, Decimal("1.50"))

    def test_update_price(self):
        item = update_item(self.manager, "Soda", "price", "1.75")
        self.assertEqual(item.price, Decimal("1.75"))
        self.assertEqual(Item.objects.get(name="Soda").price, Decimal("1.75"))

    def test_missing_item(self):
        with self.assertRaises(ItemNotFound):
            update_item(self.manager, "Calzone", "price", "3")

    def test_unknown_field(self):
        with self.assertRaises(ValidationError):
            update_item(self.manager, "Soda", "id", "3")

    def test_drivers_cannot_touch_the_menu(self):
        with self.assertRaises(ForbiddenError):
            add_item(self.driver, "Calzone", "12")
        with self.assertRaises(ForbiddenError):
            update_item(self.driver, "Soda", "price", "0")
        self.assertFalse(Item.objects.filter(name="Calzone").exists())
