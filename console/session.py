"""
console.session

Session Controller: the line-mode menu loop.

State is either anonymous (create user / log in / exit) or authenticated as one
login. The user's role is re-read from the database before every menu render
and every dispatch, so a role change made by a manager in another session is
honored on this session's very next action.

Input and output are injected:
    read_line() -> str     raises EOFError at end of input
    write(text)            text already carries its own newlines

========= CHANGE LOG =========
2026-09-12 • Menu entries carry their Action; hidden and unknown choices share one reply.
2026-09-14 • Login attempts bounded by PIZZASTORE["LOGIN_ATTEMPTS"].
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from django.conf import settings

from accounts.access import Action, authorize
from accounts.models import User
from accounts.services import (
    authenticate_user,
    current_role,
    get_user,
    login_exists,
    register_user,
    update_profile,
    update_user,
)
from catalog.query import SORT_ASC, SORT_DESC, build_query, list_stores, parse_price, run_query
from catalog.services import add_item, get_item, update_item
from orders.cart import Cart
from orders.services import (
    SCOPE_ALL,
    SCOPE_OWN,
    SCOPE_OWN_RECENT,
    SCOPE_RECENT,
    get_order_detail,
    list_orders,
    parse_order_id,
    update_status,
)
from pizzastore.exceptions import (
    ForbiddenError,
    NotFoundError,
    StoreError,
    UserNotFound,
    ValidationError,
)

logger = logging.getLogger(__name__)

RULE = "-----------------------------------------"
UNRECOGNIZED = "Unrecognized choice!"
INVALID_INPUT = "Your input is invalid!"
INVALID_CHOICE = "Please enter a valid choice."

EXIT_CHOICE = 9
LOGOUT_CHOICE = 20


@dataclass(frozen=True)
class MenuEntry:
    choice: int
    label: str
    action: str
    handler: str


MAIN_MENU = (
    MenuEntry(1, "View Profile", Action.VIEW_PROFILE, "view_profile"),
    MenuEntry(2, "Update Profile", Action.UPDATE_PROFILE, "edit_profile"),
    MenuEntry(3, "View Menu", Action.VIEW_CATALOG, "browse_menu"),
    MenuEntry(4, "Place Order", Action.PLACE_ORDER, "place_order"),
    MenuEntry(5, "View Full Order ID History", Action.VIEW_OWN_ORDERS, "order_history"),
    MenuEntry(6, "View Past Order IDs", Action.VIEW_OWN_ORDERS, "recent_orders"),
    MenuEntry(7, "View Order Information", Action.VIEW_ORDER_DETAIL, "order_information"),
    MenuEntry(8, "View Stores", Action.VIEW_STORES, "view_stores"),
    MenuEntry(9, "Update Order Status", Action.UPDATE_ORDER_STATUS, "edit_order_status"),
    MenuEntry(10, "Update Menu", Action.UPDATE_CATALOG, "edit_menu"),
    MenuEntry(11, "Update User", Action.UPDATE_USER, "edit_user"),
)

PROFILE_FIELD_CHOICES = {1: "password", 2: "favorite_item", 3: "phone_number"}
USER_FIELD_CHOICES = {1: "login", 2: "password", 3: "role", 4: "favorite_item", 5: "phone_number"}
ITEM_FIELD_CHOICES = {1: "name", 2: "ingredients", 3: "item_type", 4: "price", 5: "description"}
STATUS_SHORTCUTS = {"i": "incomplete", "incomplete": "incomplete", "c": "complete", "complete": "complete"}


def _login_attempts() -> int:
    return int(getattr(settings, "PIZZASTORE", {}).get("LOGIN_ATTEMPTS", 3))


def _money(value) -> str:
    return f"${value:.2f}"


class SessionController:
    def __init__(self, read_line: Callable[[], str], write: Callable[[str], None]):
        self._read_line = read_line
        self._write = write
        self.user: Optional[User] = None
        self._running = False

    # ---- io helpers ----
    def say(self, text: str = "") -> None:
        self._write(f"{text}\n")

    def ask(self, prompt: str) -> str:
        self._write(prompt)
        return self._read_line().strip()

    def ask_secret(self, prompt: str) -> str:
        self._write(prompt)
        return self._read_line().rstrip("\r\n")

    def read_choice(self, prompt: str = "Please make your choice: ") -> int:
        """Re-prompts until the input is a whole number."""
        while True:
            raw = self.ask(prompt)
            try:
                return int(raw)
            except ValueError:
                self.say(INVALID_INPUT)

    # ---- main loop ----
    def run(self) -> None:
        self._running = True
        try:
            while self._running:
                if self.user is None:
                    self._anonymous_turn()
                else:
                    self._authenticated_turn()
        except EOFError:
            self.say()
        self.say("Bye !")

    def _anonymous_turn(self) -> None:
        self.say("MAIN MENU")
        self.say("---------")
        self.say("1. Create user")
        self.say("2. Log in")
        self.say("9. < EXIT")
        choice = self.read_choice()
        if choice == 1:
            self._guarded(self.create_user)
        elif choice == 2:
            self._guarded(self.log_in)
        elif choice == EXIT_CHOICE:
            self._running = False
        else:
            self.say(UNRECOGNIZED)

    def _refresh_role(self) -> Optional[str]:
        """Current role from the store; logs the user out if the account is gone."""
        try:
            role = current_role(self.user)
        except StoreError as exc:
            self.say(exc.message)
            return None
        if not role:
            self.say("Your account is no longer active. Logging out.")
            self.user = None
            return None
        return role

    def _authenticated_turn(self) -> None:
        role = self._refresh_role()
        if role is None:
            # store unreachable; still let the user leave
            if self.user is not None and self.ask("Enter 20 to log out or press Enter to retry: ") == str(LOGOUT_CHOICE):
                self.log_out()
            return

        self.say("MAIN MENU")
        self.say("---------")
        for entry in MAIN_MENU:
            if authorize(role, entry.action):
                self.say(f"{entry.choice}. {entry.label}")
        self.say(".........................")
        self.say(f"{LOGOUT_CHOICE}. Log out")

        choice = self.read_choice()
        if choice == LOGOUT_CHOICE:
            self.log_out()
            return
        self.dispatch(choice)

    def dispatch(self, choice: int) -> None:
        """Look up the entry, re-check the gate with the freshly read role, run it."""
        entry = next((e for e in MAIN_MENU if e.choice == choice), None)
        role = self._refresh_role()
        if role is None:
            return
        if entry is None or not authorize(role, entry.action):
            self.say(UNRECOGNIZED)
            return
        self._guarded(getattr(self, entry.handler))

    def _guarded(self, handler: Callable[[], None]) -> None:
        try:
            handler()
        except ForbiddenError:
            self.say(UNRECOGNIZED)
        except (ValidationError, NotFoundError) as exc:
            self.say(exc.message)
        except StoreError as exc:
            logger.warning("session_store_error", extra={"event": "session_store_error", "handler": handler.__name__})
            self.say(exc.message)

    # ---- anonymous actions ----
    def create_user(self) -> None:
        while True:
            login = self.ask("Please enter your new login or 'q' to cancel: ")
            if login == "q":
                return
            if not login:
                self.say("Login cannot be empty. Please try again.")
                continue
            if login_exists(login):
                self.say(f"User {login} already exists. Please use a different login.")
                continue
            break
        self.say(RULE)
        self.say("User available.")

        while True:
            password = self.ask_secret("Please enter your new password: ")
            if password:
                break
            self.say("Password cannot be empty. Please try again.")
        self.say(RULE)

        while True:
            phone = self.ask("Lastly, please enter your phone number: ")
            if phone:
                break
            self.say("Phone number cannot be empty. Please try again.")
        self.say(RULE)

        register_user(login, password, phone)
        self.say("Successfully created user. Returning to main menu...")
        self.say(RULE)

    def log_in(self) -> None:
        login = self.ask("Please enter login: ")
        self.say(RULE)
        try:
            get_user(login)
        except UserNotFound:
            self.say("No user, returning to main menu.")
            return

        for _ in range(_login_attempts()):
            password = self.ask_secret("Please enter password: ")
            self.say(RULE)
            user = authenticate_user(login, password)
            if user is not None:
                self.user = user
                self.say("Login success!")
                return
            self.say("Incorrect Username or Password! Please try again.")
        self.say("Too many failed attempts. Returning to main menu.")

    def log_out(self) -> None:
        self.user = None
        self.say("Logged out.")

    # ---- profile ----
    def _show_user(self, user: User, heading: str = "Current user fields") -> None:
        self.say(RULE)
        self.say(heading)
        self.say()
        self.say(f"Login: {user.login}")
        self.say("Password: ********")
        self.say(f"Role: {user.role}")
        self.say(f"Favorite Item: {user.favorite_item.name if user.favorite_item else 'None'}")
        self.say(f"Phone Number: {user.phone_number}")
        self.say(RULE)

    def view_profile(self) -> None:
        self._show_user(get_user(self.user.login))

    def _pick(self, title: str, options: dict, back_label: str = "Return to Main Menu") -> Optional[str]:
        """Numbered option list; returns the mapped value or None for "back"."""
        self.say(title)
        for number, value in options.items():
            self.say(f"{number}. {value.replace('_', ' ').title()}")
        back = max(options) + 1
        self.say(f"{back}. {back_label}")
        self.say()
        while True:
            choice = self.read_choice("Desired field: ")
            if choice == back:
                return None
            if choice in options:
                return options[choice]
            self.say(INVALID_CHOICE)

    def _ask_value(self, field: str) -> str:
        self.say(RULE)
        self.say("What would you like to change this field to?")
        self.say()
        if field == "password":
            return self.ask_secret("Desired value: ")
        return self.ask("Desired value: ")

    def edit_profile(self) -> None:
        self._show_user(get_user(self.user.login))
        field = self._pick("Which field would you like to change?", PROFILE_FIELD_CHOICES)
        if field is None:
            return
        while True:
            value = self._ask_value(field)
            try:
                update_profile(self.user, field, value)
                break
            except ValidationError as exc:
                self.say(exc.message)
        self.say(RULE)
        self.say("Profile successfully updated. Returning to main menu...")

    def edit_user(self) -> None:
        self.say(RULE)
        target = get_user(self.ask("Please enter the user's login: "))
        self._show_user(target)
        field = self._pick("Which field would you like to change?", USER_FIELD_CHOICES)
        if field is None:
            return
        while True:
            value = self._ask_value(field)
            try:
                update_user(self.user, target.login, field, value)
                break
            except ValidationError as exc:
                self.say(exc.message)
        if target.pk == self.user.pk:
            # keep the session's copy in step when managers edit themselves
            self.user = get_user(value.strip() if field == "login" else target.login)
        self.say(RULE)
        self.say("User successfully updated. Returning to main menu...")

    # ---- catalog ----
    def _show_items(self, items) -> None:
        if not items:
            self.say("No items match the current filters.")
        for item in items:
            self.say(f"{item.name} {item.item_type.strip()} {_money(item.price)}")

    def browse_menu(self) -> None:
        query = build_query()
        while True:
            self.say("Pizza Menu")
            self.say(RULE)
            try:
                self._show_items(run_query(query))
            except StoreError as exc:
                # filters stay as they were; the user may change or clear them
                self.say(f"Query error: {exc.message}")
            self.say(RULE)
            self.say("Options")
            self.say()
            self.say("1. Filter by Type")
            self.say("2. Filter by Max Price")
            self.say("3. Sort Price Low to High")
            self.say("4. Sort Price High to Low")
            self.say("5. Clear Filters")
            self.say("6. Exit")
            self.say()
            option = self.read_choice("Please enter option: ")
            if option == 1:
                self.say(RULE)
                while True:
                    text = self.ask("Please enter an item type (for example 'entree', 'drinks' or 'sides'): ")
                    if text:
                        break
                    self.say("Please enter a valid item type.")
                query = query.with_type(text)
            elif option == 2:
                self.say(RULE)
                while True:
                    try:
                        bound = parse_price(self.ask("Please enter a maximum price: "))
                        break
                    except ValidationError as exc:
                        self.say(exc.message)
                query = query.with_max_price(bound)
            elif option == 3:
                query = query.with_sort(SORT_ASC)
            elif option == 4:
                query = query.with_sort(SORT_DESC)
            elif option == 5:
                query = query.cleared()
            elif option == 6:
                return
            else:
                self.say(INVALID_CHOICE)

    def view_stores(self) -> None:
        self.say("All Stores")
        self.say(RULE)
        for store in list_stores():
            state = "Open" if store.is_open else "Closed"
            self.say(f"{store.store_id} {store.address}, {store.city}, {store.state} {state}")
        self.say(RULE)

    def edit_menu(self) -> None:
        self.say(RULE)
        self.say("1. Edit an item")
        self.say("2. Add an item")
        self.say("3. Return to Main Menu")
        while True:
            choice = self.read_choice("Desired option: ")
            if choice == 1:
                return self._edit_item()
            if choice == 2:
                return self._add_item()
            if choice == 3:
                return None
            self.say(INVALID_CHOICE)

    def _edit_item(self) -> None:
        item = get_item(self.ask("Please enter the item name: "))
        self.say(RULE)
        self.say(f"Name: {item.name}")
        self.say(f"Ingredients: {item.ingredients}")
        self.say(f"Type: {item.item_type.strip()}")
        self.say(f"Price: {_money(item.price)}")
        self.say(f"Description: {item.description}")
        self.say(RULE)
        field = self._pick("Which field would you like to change?", ITEM_FIELD_CHOICES)
        if field is None:
            return
        while True:
            value = self._ask_value(field)
            try:
                update_item(self.user, item.name, field, value)
                break
            except ValidationError as exc:
                self.say(exc.message)
        self.say(RULE)
        self.say("Menu successfully updated. Returning to main menu...")

    def _add_item(self) -> None:
        name = self.ask("Item name: ")
        while True:
            try:
                price = parse_price(self.ask("Price: "))
                break
            except ValidationError as exc:
                self.say(exc.message)
        item_type = self.ask("Type: ")
        ingredients = self.ask("Ingredients: ")
        description = self.ask("Description: ")
        item = add_item(self.user, name, price, item_type, ingredients, description)
        self.say(RULE)
        self.say(f"Added {item.name} at {_money(item.price)}. Returning to main menu...")

    # ---- orders ----
    def place_order(self) -> None:
        cart = Cart()
        store_id = self.ask("Please enter a store ID or 'q' to cancel: ")
        if store_id == "q":
            return
        try:
            cart.select_store(store_id)
        except (ValidationError, NotFoundError) as exc:
            # a missing or closed store ends order entry
            self.say(exc.message)
            self.say("Returning to main menu...")
            return
        self.say(RULE)
        self.say(f"Ordering from store {cart.store_id}.")

        while True:
            name = self.ask("Item name ('done' to finish, 'cancel' to discard): ")
            if name.lower() == "cancel":
                cart.cancel()
                self.say("Order cancelled. Returning to main menu...")
                return
            if name.lower() == "done":
                if cart.is_empty:
                    self.say("Your cart is empty.")
                    continue
                break
            quantity = self.ask("Quantity: ")
            try:
                line = cart.add_item(name, quantity)
            except (ValidationError, NotFoundError) as exc:
                self.say(exc.message)
                continue
            self.say(f"{line.item_name} x{line.quantity} in cart. Cart total: {_money(cart.total)}")

        self.say(RULE)
        for line in cart.lines:
            self.say(f"{line.quantity} x {line.item_name}")
        self.say(f"Total: {_money(cart.total)}")

        while True:
            answer = self.ask("Submit order? (y/n): ").lower()
            if answer != "y":
                cart.cancel()
                self.say("Order cancelled. Returning to main menu...")
                return
            try:
                order = cart.submit(self.user)
                break
            except StoreError as exc:
                # the cart is untouched; offer another try
                self.say(exc.message)
        self.say(RULE)
        self.say(f"Order placed! Order ID: {order.order_id}  Total: {_money(order.total_price)}")

    def _show_orders(self, orders) -> None:
        self.say(RULE)
        if not orders:
            self.say("No orders found.")
        for order in orders:
            self.say(
                f"{order.order_id}  {order.created_at:%Y-%m-%d %H:%M}  {order.status}  "
                f"{_money(order.total_price)}  {order.store.store_id}  {order.owner.login}"
            )
        self.say(RULE)

    def order_history(self) -> None:
        scope = SCOPE_ALL if authorize(self.user.role, Action.VIEW_ALL_ORDERS) else SCOPE_OWN
        self._show_orders(list_orders(self.user, scope))

    def recent_orders(self) -> None:
        scope = SCOPE_RECENT if authorize(self.user.role, Action.VIEW_ALL_ORDERS) else SCOPE_OWN_RECENT
        self._show_orders(list_orders(self.user, scope))

    def _ask_order_id(self) -> int:
        while True:
            try:
                return parse_order_id(self.ask("Order ID: "))
            except ValidationError as exc:
                self.say(exc.message)

    def _show_detail(self, detail) -> None:
        self.say(RULE)
        self.say(f"Order ID: {detail.order_id}")
        self.say(f"Placed: {detail.created_at:%Y-%m-%d %H:%M}")
        self.say(f"Customer: {detail.owner_login}")
        self.say(f"Store: {detail.store_id}")
        self.say(f"Status: {detail.status}")
        for line in detail.lines:
            self.say(f"  {line.quantity} x {line.item_name}")
        self.say(f"Total: {_money(detail.total_price)}")
        self.say(RULE)

    def order_information(self) -> None:
        self.say(RULE)
        self.say("Please enter the order ID you want to view.")
        self._show_detail(get_order_detail(self.user, self._ask_order_id()))

    def edit_order_status(self) -> None:
        self.say(RULE)
        self.say("Please enter the order ID that you wish to change the status of.")
        detail = get_order_detail(self.user, self._ask_order_id())
        self._show_detail(detail)
        while True:
            answer = self.ask("Enter new status, incomplete (i) or complete (c): ").lower()
            if answer in STATUS_SHORTCUTS:
                break
            self.say("Unrecognized choice, please try again.")
        update_status(self.user, detail.order_id, STATUS_SHORTCUTS[answer])
        self.say(RULE)
        self.say("Order status updated. Returning to main menu...")

