from io import StringIO
from unittest import mock

from django.core.management import call_command
from django.core.management.base import CommandError
from django.db import OperationalError
from django.test import TestCase


class PizzastoreCommandTests(TestCase):
    def test_runs_session_on_stdin(self):
        out = StringIO()
        with mock.patch("builtins.input", side_effect=["abc", "9"]):
            call_command("pizzastore", stdout=out)
        text = out.getvalue()
        self.assertIn("Connecting to database...", text)
        self.assertIn("Your input is invalid!", text)
        self.assertIn("Bye !", text)

    def test_end_of_input(self):
        out = StringIO()
        with mock.patch("builtins.input", side_effect=EOFError):
            call_command("pizzastore", stdout=out)
        self.assertIn("Bye !", out.getvalue())

    def test_unreachable_database_is_fatal(self):
        with mock.patch(
            "console.management.commands.pizzastore.connection.ensure_connection",
            side_effect=OperationalError("no route"),
        ):
            with self.assertRaises(CommandError):
                call_command("pizzastore", stdout=StringIO())
