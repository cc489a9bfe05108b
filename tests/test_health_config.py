"""Health endpoint and settings validation."""

import unittest

from pydantic import ValidationError

from support import ApiTestCase

from ratestore.core.config import DEFAULT_JWT_SECRET, Settings


class TestHealth(ApiTestCase):
    """Health endpoint, error body shape and its OpenAPI description."""

    def test_health_reports_database(self) -> None:
        resp = self.client.get(f"{self.api}/health")
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["status"], "ok")
        self.assertEqual(body["database"], "connected")

    def test_unknown_route_uses_error_shape(self) -> None:
        resp = self.client.get(f"{self.api}/no-such-route")
        self.assertEqual(resp.status_code, 404)
        self.assertIn("error", resp.json())

    def test_openapi_documents_error_body(self) -> None:
        schema = self.client.get("/openapi.json").json()
        self.assertIn("ErrorResponse", schema["components"]["schemas"])
        login = schema["paths"][f"{self.api}/auth/login"]["post"]["responses"]
        self.assertEqual(
            login["401"]["content"]["application/json"]["schema"]["$ref"],
            "#/components/schemas/ErrorResponse",
        )


def _settings(**overrides) -> Settings:
    return Settings(_env_file=None, **overrides)


class TestSettings(unittest.TestCase):
    """Settings validators reject malformed environment values."""

    def test_defaults(self) -> None:
        s = _settings(JWT_SECRET=DEFAULT_JWT_SECRET)
        self.assertEqual(s.JWT_EXPIRE_MINUTES, 10080)
        self.assertEqual(s.COOKIE_NAME, "token")
        self.assertTrue(s.uses_default_jwt_secret)

    def test_custom_secret_is_not_default(self) -> None:
        self.assertFalse(_settings(JWT_SECRET="something-else").uses_default_jwt_secret)

    def test_sqlite_url_accepted(self) -> None:
        self.assertEqual(_settings(DATABASE_URL="sqlite:///./x.db").DATABASE_URL, "sqlite:///./x.db")

    def test_rejects_other_database_schemes(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(DATABASE_URL="mysql://localhost/db")

    def test_api_prefix_normalized(self) -> None:
        self.assertEqual(_settings(API_PREFIX="/api/").API_PREFIX, "/api")
        with self.assertRaises(ValidationError):
            _settings(API_PREFIX="api")

    def test_log_level_uppercased(self) -> None:
        self.assertEqual(_settings(LOG_LEVEL="debug").LOG_LEVEL, "DEBUG")
        with self.assertRaises(ValidationError):
            _settings(LOG_LEVEL="chatty")

    def test_token_lifetime_bounds(self) -> None:
        for minutes in (0, 10081):
            with self.subTest(minutes=minutes), self.assertRaises(ValidationError):
                _settings(JWT_EXPIRE_MINUTES=minutes)

    def test_blank_secret_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(JWT_SECRET="   ")


if __name__ == "__main__":
    unittest.main()
