from decimal import Decimal as D

from django.core.management.base import BaseCommand
from django.db import transaction

from accounts.models import ROLE_CUSTOMER, ROLE_DRIVER, ROLE_MANAGER, User
from catalog.models import Item, Store

STORES = [
    # store_id, address, city, state, is_open, review_score
    ("S1", "100 Main St", "Riverside", "CA", True, D("4.5")),
    ("S2", "42 University Ave", "Riverside", "CA", True, D("4.1")),
    ("S3", "9 Mission Blvd", "Ontario", "CA", False, D("3.2")),
]

ITEMS = [
    # name, item_type, price, ingredients, description
    ("Pepperoni", "entree", D("9.99"), "dough, tomato sauce, mozzarella, pepperoni", "Classic pepperoni pizza"),
    ("Cheese", "entree", D("8.49"), "dough, tomato sauce, mozzarella", "Plain cheese pizza"),
    ("Veggie Supreme", "entree", D("11.25"), "dough, tomato sauce, peppers, olives, onion", "Loaded with vegetables"),
    ("Garlic Knots", " sides", D("4.00"), "dough, garlic, butter, parsley", "Six knots"),
    ("Caesar Salad", " sides", D("6.50"), "romaine, parmesan, croutons", "Side salad"),
    ("Soda", " drinks", D("1.50"), "", "Fountain drink"),
    ("Lemonade", " drinks", D("2.25"), "", "Fresh lemonade"),
]

USERS = [
    # login, password, role, phone_number
    ("alice", "pw1", ROLE_CUSTOMER, "555-0101"),
    ("bob", "pw2", ROLE_CUSTOMER, "555-0102"),
    ("dana", "driverpw", ROLE_DRIVER, "555-0201"),
    ("maria", "managerpw", ROLE_MANAGER, "555-0301"),
]


class Command(BaseCommand):
    help = "Seed stores, menu items and sample users. Idempotent, safe to run multiple times."

    def add_arguments(self, parser):
        parser.add_argument(
            "--no-users",
            action="store_true",
            help="Only seed stores and menu items.",
        )

    @transaction.atomic
    def handle(self, *args, **opts):
        for store_id, address, city, state, is_open, score in STORES:
            Store.objects.get_or_create(
                store_id=store_id,
                defaults={"address": address, "city": city, "state": state,
                          "is_open": is_open, "review_score": score},
            )

        # Item types keep the leading space some rows carried in the source menu data.
        for name, item_type, price, ingredients, description in ITEMS:
            Item.objects.get_or_create(
                name=name,
                defaults={"item_type": item_type, "price": price,
                          "ingredients": ingredients, "description": description},
            )

        if not opts.get("no_users"):
            for login, password, role, phone in USERS:
                if not User.objects.filter(login=login).exists():
                    User.objects.create_user(login=login, password=password, role=role, phone_number=phone)

        self.stdout.write(self.style.SUCCESS(
            f"pizzastore seed complete: {Store.objects.count()} stores, "
            f"{Item.objects.count()} items, {User.objects.count()} users."
        ))
