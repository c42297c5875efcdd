"""Unit tests for portal.core.config.Settings validation."""

import os
import unittest
from unittest.mock import patch

from pydantic import ValidationError

from portal.core.config import DEFAULT_GATE_EXCLUDED_PREFIXES, Settings


def _settings(**overrides) -> Settings:
    return Settings(_env_file=None, **overrides)


class TestSigningSecret(unittest.TestCase):
    """JWT_SECRET is mandatory: no fallback default."""

    def test_missing_secret_fails(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            with self.assertRaises(ValidationError):
                _settings()

    def test_blank_secret_fails(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(JWT_SECRET="   ")

    def test_secret_is_not_echoed(self) -> None:
        s = _settings(JWT_SECRET="super-secret-value")
        self.assertEqual(s.JWT_SECRET.get_secret_value(), "super-secret-value")
        self.assertNotIn("super-secret-value", repr(s))

    def test_non_hmac_algorithm_fails(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(JWT_SECRET="x", JWT_ALGORITHM="RS256")


class TestDatabaseUrl(unittest.TestCase):
    def test_postgres_required(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(JWT_SECRET="x", DATABASE_URL="mysql://localhost/portal")

    def test_strips_whitespace(self) -> None:
        s = _settings(JWT_SECRET="x", DATABASE_URL="  postgresql://u:p@h:5432/db ")
        self.assertEqual(s.DATABASE_URL, "postgresql://u:p@h:5432/db")

    def test_statement_timeout_bounds(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(JWT_SECRET="x", DB_STATEMENT_TIMEOUT_MS=0)


class TestEnvironment(unittest.TestCase):
    def test_secure_cookies_only_in_prod(self) -> None:
        self.assertFalse(_settings(JWT_SECRET="x", APP_ENV="dev").secure_cookies)
        self.assertTrue(_settings(JWT_SECRET="x", APP_ENV="prod").secure_cookies)

    def test_unknown_environment_fails(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(JWT_SECRET="x", APP_ENV="staging")


class TestGateExclusions(unittest.TestCase):
    def test_default_excludes_api_and_static(self) -> None:
        s = _settings(JWT_SECRET="x")
        self.assertEqual(s.GATE_EXCLUDED_PREFIXES, DEFAULT_GATE_EXCLUDED_PREFIXES)
        self.assertIn("/api", s.GATE_EXCLUDED_PREFIXES)

    def test_configurable_from_env_json(self) -> None:
        with patch.dict(os.environ, {"GATE_EXCLUDED_PREFIXES": '["/assets", " /health "]'}):
            s = _settings(JWT_SECRET="x")
        self.assertEqual(s.GATE_EXCLUDED_PREFIXES, ["/assets", "/health"])

    def test_relative_prefix_fails(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(JWT_SECRET="x", GATE_EXCLUDED_PREFIXES=["assets"])

    def test_root_prefix_fails(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(JWT_SECRET="x", GATE_EXCLUDED_PREFIXES=["/"])


if __name__ == "__main__":
    unittest.main()
