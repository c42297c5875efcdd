"""Unit tests for portal.core.security: bcrypt helpers and TokenCodec issue/verify/decode."""

import unittest
import uuid
from datetime import UTC, datetime, timedelta

import jwt

from portal.core.security import (
    AUTH_COOKIE_MAX_AGE,
    TOKEN_TTL,
    TokenCodec,
    hash_password,
    verify_password,
)
from portal.schemas.auth import Identity, Role

SECRET = "unit-test-secret"


def _identity(role: Role = Role.MEMBER) -> Identity:
    return Identity(id=uuid.uuid4(), email="a@x.com", role=role)


class TestPasswordHashing(unittest.TestCase):
    """hash_password never returns the plaintext; verify_password accepts only the right password."""

    def test_hash_is_salted_bcrypt(self) -> None:
        h1 = hash_password("right-password")
        h2 = hash_password("right-password")
        self.assertNotEqual(h1, "right-password")
        self.assertTrue(h1.startswith("$2"))
        self.assertNotEqual(h1, h2)

    def test_verify_right_and_wrong(self) -> None:
        hashed = hash_password("right-password")
        self.assertTrue(verify_password("right-password", hashed))
        self.assertFalse(verify_password("wrong-password", hashed))

    def test_verify_malformed_hash_is_false(self) -> None:
        self.assertFalse(verify_password("anything", "not-a-bcrypt-hash"))

    def test_long_password_truncated_consistently(self) -> None:
        long_pw = "x" * 100
        self.assertTrue(verify_password(long_pw, hash_password(long_pw)))


class TestTokenCodecConstruction(unittest.TestCase):
    def test_empty_secret_rejected(self) -> None:
        with self.assertRaises(ValueError):
            TokenCodec("")
        with self.assertRaises(ValueError):
            TokenCodec("   ")

    def test_ttl_is_seven_days(self) -> None:
        self.assertEqual(TOKEN_TTL, timedelta(days=7))
        self.assertEqual(AUTH_COOKIE_MAX_AGE, 7 * 24 * 60 * 60)


class TestTokenVerify(unittest.TestCase):
    """verify() returns the identity for fresh, untampered tokens and None otherwise."""

    def setUp(self) -> None:
        self.codec = TokenCodec(SECRET)

    def test_round_trip_immediately_after_issue(self) -> None:
        identity = _identity(Role.ADMIN)
        payload = self.codec.verify(self.codec.issue(identity))
        self.assertIsNotNone(payload)
        self.assertEqual(payload.id, identity.id)
        self.assertEqual(payload.email, identity.email)
        self.assertEqual(payload.role, Role.ADMIN)
        self.assertEqual(payload.exp - payload.iat, TOKEN_TTL)

    def test_expired_token_is_none(self) -> None:
        issued = datetime.now(UTC) - TOKEN_TTL - timedelta(minutes=1)
        token = self.codec.issue(_identity(), now=issued)
        self.assertIsNone(self.codec.verify(token))

    def test_token_just_inside_window_is_valid(self) -> None:
        issued = datetime.now(UTC) - TOKEN_TTL + timedelta(minutes=5)
        token = self.codec.issue(_identity(), now=issued)
        self.assertIsNotNone(self.codec.verify(token))

    def test_tampered_signature_is_none(self) -> None:
        token = self.codec.issue(_identity())
        header, body, signature = token.split(".")
        flipped = ("A" if signature[0] != "A" else "B") + signature[1:]
        self.assertIsNone(self.codec.verify(f"{header}.{body}.{flipped}"))

    def test_payload_swapped_under_member_signature_is_none(self) -> None:
        member_token = self.codec.issue(_identity(Role.MEMBER))
        admin_token = self.codec.issue(_identity(Role.ADMIN))
        h, _, sig = member_token.split(".")
        _, admin_body, _ = admin_token.split(".")
        self.assertIsNone(self.codec.verify(f"{h}.{admin_body}.{sig}"))

    def test_other_secret_is_none(self) -> None:
        token = TokenCodec("another-secret").issue(_identity())
        self.assertIsNone(self.codec.verify(token))

    def test_garbage_is_none(self) -> None:
        self.assertIsNone(self.codec.verify("not-a-jwt"))
        self.assertIsNone(self.codec.verify(""))

    def test_token_without_exp_is_none(self) -> None:
        token = jwt.encode(
            {"id": str(uuid.uuid4()), "email": "a@x.com", "role": "admin"},
            SECRET,
            algorithm="HS256",
        )
        self.assertIsNone(self.codec.verify(token))

    def test_unknown_role_is_none(self) -> None:
        token = jwt.encode(
            {
                "id": str(uuid.uuid4()),
                "email": "a@x.com",
                "role": "superuser",
                "exp": datetime.now(UTC) + timedelta(hours=1),
            },
            SECRET,
            algorithm="HS256",
        )
        self.assertIsNone(self.codec.verify(token))

    def test_alg_none_rejected(self) -> None:
        token = jwt.encode(
            {
                "id": str(uuid.uuid4()),
                "email": "a@x.com",
                "role": "admin",
                "exp": datetime.now(UTC) + timedelta(hours=1),
            },
            None,
            algorithm="none",
        )
        self.assertIsNone(self.codec.verify(token))


class TestTokenDecode(unittest.TestCase):
    """decode() reads claims without checking signature or expiry."""

    def setUp(self) -> None:
        self.codec = TokenCodec(SECRET)

    def test_decodes_foreign_signature(self) -> None:
        identity = _identity(Role.ADMIN)
        token = TokenCodec("another-secret").issue(identity)
        payload = self.codec.decode(token)
        self.assertIsNotNone(payload)
        self.assertEqual(payload.id, identity.id)
        self.assertIsNone(self.codec.verify(token))

    def test_decodes_expired_token(self) -> None:
        identity = _identity()
        token = self.codec.issue(identity, now=datetime.now(UTC) - timedelta(days=30))
        payload = self.codec.decode(token)
        self.assertIsNotNone(payload)
        self.assertEqual(payload.email, identity.email)

    def test_malformed_is_none(self) -> None:
        self.assertIsNone(self.codec.decode("a.b"))
        self.assertIsNone(self.codec.decode("not-a-jwt"))


if __name__ == "__main__":
    unittest.main()
