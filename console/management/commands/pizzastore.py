"""
console.management.commands.pizzastore

    python manage.py pizzastore

Runs the line-mode session on stdin/stdout. The only fatal error is failing
to reach the database at startup; everything after that reports and returns
to the menu.
"""
from __future__ import annotations

import logging

from django.core.management.base import BaseCommand, CommandError
from django.db import DatabaseError, connection

from console.session import SessionController

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = "Run the PizzaStore console session (stdin/stdout)."

    def handle(self, *args, **opts) -> None:
        self.stdout.write("Connecting to database...", ending="")
        try:
            connection.ensure_connection()
        except DatabaseError as exc:
            logger.error("console_connect_failed", extra={"event": "console_connect_failed"})
            raise CommandError(f"Unable to connect to database: {exc}") from exc
        self.stdout.write(self.style.SUCCESS("Done"))

        def write(text: str) -> None:
            self.stdout.write(text, ending="")
            self.stdout.flush()

        SessionController(read_line=input, write=write).run()
