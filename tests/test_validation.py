"""Unit tests for ratestore.services.validation field policies."""

import unittest

from ratestore.services.errors import ValidationError
from ratestore.services.validation import (
    SIGNUP_NAME_MIN_LEN,
    address_problem,
    email_problem,
    ensure_valid,
    name_problem,
    password_problem,
    rating_value_problem,
)


class TestPasswordPolicy(unittest.TestCase):
    """8-16 chars with an ASCII uppercase letter and a listed special character."""

    def test_accepts_upper_and_special_within_length(self) -> None:
        self.assertIsNone(password_problem("Abcdefg1!"))
        self.assertIsNone(password_problem("A" + "b" * 14 + "@"))  # 16 chars

    def test_length_bounds(self) -> None:
        self.assertIn("between 8 and 16", password_problem("Ab!defg"))
        self.assertIn("between 8 and 16", password_problem("A" + "b" * 15 + "!"))

    def test_requires_uppercase(self) -> None:
        self.assertIn("uppercase", password_problem("abcdefg1!"))
        # Only ASCII A-Z counts as uppercase.
        self.assertIn("uppercase", password_problem("\u00e9bcdefg\u00c9!"))

    def test_requires_special_character(self) -> None:
        self.assertIn("special", password_problem("Abcdefg12"))
        self.assertIn("special", password_problem("Abcdefg1_"))  # underscore is not in the set


class TestNamePolicy(unittest.TestCase):
    """Name length bounds for signup and admin-created accounts."""

    def test_signup_requires_twenty_characters(self) -> None:
        self.assertIsNotNone(name_problem("x" * 19, min_len=SIGNUP_NAME_MIN_LEN))
        self.assertIsNone(name_problem("x" * 20, min_len=SIGNUP_NAME_MIN_LEN))

    def test_admin_default_requires_two_characters(self) -> None:
        self.assertIsNotNone(name_problem("x"))
        self.assertIsNone(name_problem("xy"))

    def test_max_sixty(self) -> None:
        self.assertIsNone(name_problem("x" * 60))
        self.assertIsNotNone(name_problem("x" * 61))

    def test_blank_is_required(self) -> None:
        self.assertEqual(name_problem("   "), "Name is required")


class TestEmailAndAddress(unittest.TestCase):
    """Email format and address length."""

    def test_email_format(self) -> None:
        self.assertIsNone(email_problem("owner9@test.com"))
        for bad in ("owner9", "owner9@test", "a b@test.com", "@test.com"):
            with self.subTest(email=bad):
                self.assertEqual(email_problem(bad), "Invalid email format")

    def test_address_max_400(self) -> None:
        self.assertIsNone(address_problem("x" * 400))
        self.assertIsNotNone(address_problem("x" * 401))


class TestRatingValue(unittest.TestCase):
    """Only integers 1-5 are ratings; booleans are not."""

    def test_accepts_one_to_five(self) -> None:
        for value in range(1, 6):
            self.assertIsNone(rating_value_problem(value))

    def test_rejects_out_of_range_and_non_integers(self) -> None:
        for value in (0, 6, -1, 4.5, "4", True, None):
            with self.subTest(value=value):
                self.assertIsNotNone(rating_value_problem(value))


class TestEnsureValid(unittest.TestCase):
    """ensure_valid raises on the first reported problem."""

    def test_raises_first_problem(self) -> None:
        with self.assertRaises(ValidationError) as ctx:
            ensure_valid(None, "first", "second")
        self.assertEqual(ctx.exception.message, "first")
        self.assertEqual(ctx.exception.status_code, 400)

    def test_no_problem_no_error(self) -> None:
        ensure_valid(None, None)


if __name__ == "__main__":
    unittest.main()
