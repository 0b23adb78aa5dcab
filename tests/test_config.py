"""Unit tests for app.core.config.Settings validation."""

import unittest

from pydantic import ValidationError

from app.core.config import INSECURE_DEFAULT_JWT_SECRET, Settings


class TestJwtSecret(unittest.TestCase):
    def test_prod_refuses_default_secret(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(APP_ENV="prod", JWT_SECRET=INSECURE_DEFAULT_JWT_SECRET)

    def test_prod_accepts_configured_secret_and_secures_cookies(self) -> None:
        s = Settings(APP_ENV="prod", JWT_SECRET="a-real-secret")
        self.assertTrue(s.secure_cookies)

    def test_dev_allows_default_secret_without_secure_cookies(self) -> None:
        s = Settings(APP_ENV="dev", JWT_SECRET=INSECURE_DEFAULT_JWT_SECRET)
        self.assertFalse(s.secure_cookies)
        self.assertEqual(s.SESSION_EXPIRE_DAYS, 7)
        self.assertEqual(s.SESSION_COOKIE_NAME, "session")

    def test_empty_secret_is_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(JWT_SECRET="  ")


class TestOtherFields(unittest.TestCase):
    def test_database_url_must_be_mysql_or_sqlite(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(DATABASE_URL="postgresql://localhost/tasks")
        self.assertEqual(
            Settings(DATABASE_URL=" mysql+pymysql://u:p@db/tasks ").DATABASE_URL,
            "mysql+pymysql://u:p@db/tasks",
        )

    def test_route_prefixes_are_normalized(self) -> None:
        s = Settings(PROTECTED_ROUTE_PREFIXES=["/dashboard/", "/api/v1/tasks"])
        self.assertEqual(s.PROTECTED_ROUTE_PREFIXES, ["/dashboard", "/api/v1/tasks"])
        with self.assertRaises(ValidationError):
            Settings(ADMIN_ROUTE_PREFIXES=["api/v1/admin"])

    def test_jwt_algorithm_must_be_hmac(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(JWT_ALGORITHM="RS256")


if __name__ == "__main__":
    unittest.main()
