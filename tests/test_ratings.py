"""Tests for ratestore.services.ratings: aggregation and the rating upsert."""

import unittest

from support import DatabaseTestCase

from ratestore.models import Rating, Role
from ratestore.services.errors import NotFound, ValidationError
from ratestore.services.ratings import (
    average_rating,
    get_caller_rating,
    submit_rating,
    summarize_ratings,
    summarize_totals,
)


class TestAverageRating(unittest.TestCase):
    """Averages round half-up to 2 places and are None with no ratings."""

    def test_no_ratings_is_unavailable_not_zero(self) -> None:
        self.assertIsNone(average_rating(0, 0))
        summary = summarize_ratings([])
        self.assertEqual(summary.count, 0)
        self.assertIsNone(summary.average)

    def test_arithmetic_mean(self) -> None:
        summary = summarize_ratings([5, 4, 3])
        self.assertEqual(summary.count, 3)
        self.assertEqual(summary.average, 4.0)

    def test_rounds_to_two_decimals(self) -> None:
        self.assertEqual(summarize_ratings([5, 4, 4]).average, 4.33)
        self.assertEqual(summarize_ratings([5, 5, 4]).average, 4.67)

    def test_rounds_half_up(self) -> None:
        # 33 / 8 = 4.125 exactly; half-up gives 4.13 (banker's rounding would give 4.12).
        self.assertEqual(average_rating(33, 8), 4.13)

    def test_null_aggregates_from_outer_join(self) -> None:
        summary = summarize_totals(None, None)
        self.assertEqual(summary.count, 0)
        self.assertIsNone(summary.average)


class TestSubmitRating(DatabaseTestCase):
    """One rating per (user, store); resubmission overwrites in place."""

    def setUp(self) -> None:
        super().setUp()
        self.user = self.make_account("rater@test.com")
        self.store = self.make_store("owner@test.com", "shop@test.com")

    def test_first_submission_creates_row(self) -> None:
        rating = submit_rating(self.db, self.user.id, self.store.id, 4)
        self.assertEqual(rating.value, 4)
        self.assertEqual(rating.user_id, self.user.id)
        self.assertEqual(rating.store_id, self.store.id)
        self.assertEqual(self.count(Rating), 1)

    def test_resubmission_overwrites_in_place(self) -> None:
        first = submit_rating(self.db, self.user.id, self.store.id, 2)
        first_id = first.id
        second = submit_rating(self.db, self.user.id, self.store.id, 5)
        self.assertEqual(second.id, first_id)
        self.assertEqual(second.value, 5)
        self.assertEqual(self.count(Rating), 1)
        self.assertEqual(get_caller_rating(self.db, self.user.id, self.store.id), 5)

    def test_ratings_from_different_users_are_separate_rows(self) -> None:
        other = self.make_account("rater2@test.com")
        submit_rating(self.db, self.user.id, self.store.id, 2)
        submit_rating(self.db, other.id, self.store.id, 3)
        self.assertEqual(self.count(Rating), 2)

    def test_out_of_range_value_writes_nothing(self) -> None:
        for value in (0, 6):
            with self.subTest(value=value):
                with self.assertRaises(ValidationError):
                    submit_rating(self.db, self.user.id, self.store.id, value)
        self.assertEqual(self.count(Rating), 0)

    def test_missing_store(self) -> None:
        with self.assertRaises(NotFound):
            submit_rating(self.db, self.user.id, "no-such-store", 3)
        self.assertEqual(self.count(Rating), 0)

    def test_caller_rating_absent(self) -> None:
        self.assertIsNone(get_caller_rating(self.db, self.user.id, self.store.id))

    def test_store_owner_account_role(self) -> None:
        self.db.expire_all()
        self.assertIs(self.store.owner.role, Role.STORE_OWNER)


if __name__ == "__main__":
    unittest.main()
