"""Unit tests for ratestore.core.security: password hashing and session tokens."""

import string
import unittest
from datetime import UTC, datetime, timedelta

import jwt

from ratestore.core.security import (
    TokenService,
    TokenVerificationError,
    hash_password,
    verify_password,
)
from ratestore.models import Role

_B64URL_ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits + "-_"


def _tamper_last_char(token: str) -> str:
    """Change the last signature character so that decoded signature bytes differ."""
    # Shift by 32 flips the high bit of the 6-bit group; low bits may be padding only.
    idx = _B64URL_ALPHABET.index(token[-1])
    return token[:-1] + _B64URL_ALPHABET[(idx + 32) % 64]


class TestPasswordHashing(unittest.TestCase):
    """bcrypt hashing at cost 10 and tolerant verification."""

    def test_hash_is_not_plaintext_and_verifies(self) -> None:
        hashed = hash_password("Abcdefg1!")
        self.assertNotEqual(hashed, "Abcdefg1!")
        self.assertTrue(hashed.startswith("$2"))
        self.assertTrue(verify_password("Abcdefg1!", hashed))

    def test_wrong_password_does_not_verify(self) -> None:
        hashed = hash_password("Abcdefg1!")
        self.assertFalse(verify_password("Abcdefg1?", hashed))

    def test_uses_cost_factor_10(self) -> None:
        self.assertEqual(hash_password("Abcdefg1!").split("$")[2], "10")

    def test_malformed_hash_returns_false(self) -> None:
        self.assertFalse(verify_password("Abcdefg1!", "not-a-bcrypt-hash"))


class TestTokenRoundTrip(unittest.TestCase):
    """Session tokens verify only when intact, unexpired and signed with our secret."""

    def setUp(self) -> None:
        self.tokens = TokenService(secret="round-trip-secret", expire_minutes=30)

    def test_verify_returns_issued_claims_for_every_role(self) -> None:
        for role in Role:
            with self.subTest(role=role):
                claims = self.tokens.verify(self.tokens.issue("account-123", role))
                self.assertEqual(claims.account_id, "account-123")
                self.assertIs(claims.role, role)

    def test_payload_carries_issued_at_and_expiry(self) -> None:
        now = datetime.now(UTC).replace(microsecond=0)
        token = self.tokens.issue("a1", Role.NORMAL_USER, now=now)
        payload = jwt.decode(token, "round-trip-secret", algorithms=["HS256"])
        self.assertEqual(payload["iat"], int(now.timestamp()))
        self.assertEqual(payload["exp"], int((now + timedelta(minutes=30)).timestamp()))

    def test_tampered_signature_fails(self) -> None:
        token = self.tokens.issue("account-123", Role.SYSTEM_ADMIN)
        with self.assertRaises(TokenVerificationError):
            self.tokens.verify(_tamper_last_char(token))

    def test_other_secret_fails(self) -> None:
        token = TokenService(secret="someone-else").issue("account-123", Role.NORMAL_USER)
        with self.assertRaises(TokenVerificationError):
            self.tokens.verify(token)

    def test_expired_token_fails(self) -> None:
        issued = datetime.now(UTC) - timedelta(minutes=31)
        token = self.tokens.issue("account-123", Role.NORMAL_USER, now=issued)
        with self.assertRaises(TokenVerificationError) as ctx:
            self.tokens.verify(token)
        self.assertEqual(ctx.exception.message, "Token has expired")

    def test_malformed_token_fails(self) -> None:
        for token in ("", "abc", "a.b.c"):
            with self.subTest(token=token):
                with self.assertRaises(TokenVerificationError):
                    self.tokens.verify(token)

    def test_unknown_role_claim_fails(self) -> None:
        now = datetime.now(UTC)
        token = jwt.encode(
            {"sub": "account-123", "role": "SUPERUSER", "iat": now, "exp": now + timedelta(minutes=5)},
            "round-trip-secret",
            algorithm="HS256",
        )
        with self.assertRaises(TokenVerificationError):
            self.tokens.verify(token)

    def test_missing_expiry_fails(self) -> None:
        token = jwt.encode(
            {"sub": "account-123", "role": "NORMAL_USER", "iat": datetime.now(UTC)},
            "round-trip-secret",
            algorithm="HS256",
        )
        with self.assertRaises(TokenVerificationError):
            self.tokens.verify(token)

    def test_empty_secret_rejected(self) -> None:
        with self.assertRaises(ValueError):
            TokenService(secret="")


if __name__ == "__main__":
    unittest.main()
