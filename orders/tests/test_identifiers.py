from unittest import mock

from django.db import IntegrityError
from django.test import SimpleTestCase

from orders.identifiers import ORDER_ID_MAX, generate_order_id, insert_with_unique_id
from pizzastore.exceptions import StoreError


class GenerateOrderIdTests(SimpleTestCase):
    def test_candidates_stay_in_range(self):
        for _ in range(200):
            self.assertTrue(1 <= generate_order_id() <= ORDER_ID_MAX)

    def test_extremes_of_the_random_source(self):
        with mock.patch("orders.identifiers.secrets.randbelow", return_value=0):
            self.assertEqual(generate_order_id(), 1)
        with mock.patch("orders.identifiers.secrets.randbelow", return_value=ORDER_ID_MAX - 1):
            self.assertEqual(generate_order_id(), ORDER_ID_MAX)


class InsertWithUniqueIdTests(SimpleTestCase):
    """The database is replaced by a set of taken keys."""

    def setUp(self):
        self.taken = {5}
        atomic = mock.patch("orders.identifiers.transaction.atomic")
        atomic.start()
        self.addCleanup(atomic.stop)

    def create(self, candidate):
        if candidate in self.taken:
            raise IntegrityError("UNIQUE constraint failed")
        self.taken.add(candidate)
        return candidate

    def test_collision_is_retried_with_a_new_candidate(self):
        with mock.patch("orders.identifiers.generate_order_id", side_effect=[5, 5, 9]):
            result = insert_with_unique_id(self.create, exists=self.taken.__contains__)
        self.assertEqual(result, 9)

    def test_other_integrity_errors_propagate(self):
        def broken(candidate):
            raise IntegrityError("NOT NULL constraint failed")

        with mock.patch("orders.identifiers.generate_order_id", return_value=11):
            with self.assertRaises(IntegrityError):
                insert_with_unique_id(broken, exists=self.taken.__contains__)

    def test_exhaustion_raises_store_error(self):
        with mock.patch("orders.identifiers.generate_order_id", return_value=5) as gen:
            with self.assertRaises(StoreError):
                insert_with_unique_id(self.create, exists=self.taken.__contains__, max_tries=4)
        self.assertEqual(gen.call_count, 4)
