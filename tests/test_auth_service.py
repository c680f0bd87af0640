"""AuthService against in-memory SQLite: registration, duplicate email, login."""

import unittest
from unittest.mock import patch

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import settings
from app.core.errors import Conflict, Unauthorized
from app.core.security import decode_access_token, hash_password, verify_password
from app.models import Base
from app.services.auth import AuthService


class AuthServiceTestCase(unittest.TestCase):
    def setUp(self) -> None:
        rounds = patch.object(settings, "BCRYPT_ROUNDS", 4)
        rounds.start()
        self.addCleanup(rounds.stop)

        engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        Base.metadata.create_all(engine)
        self.service = AuthService(sessionmaker(bind=engine, autoflush=False))

    def test_register_returns_token_for_new_user(self) -> None:
        result = self.service.register("Ada", "ada@example.com", "secret1")

        self.assertEqual(result.user.name, "Ada")
        self.assertEqual(result.user.email, "ada@example.com")
        payload = decode_access_token(result.access_token)
        self.assertEqual(payload["sub"], result.user.id)
        self.assertEqual(payload["email"], "ada@example.com")

    def test_duplicate_email_is_conflict(self) -> None:
        self.service.register("Ada", "ada@example.com", "secret1")

        with self.assertRaises(Conflict):
            self.service.register("Other Ada", "ada@example.com", "another1")

    def test_login_with_correct_password(self) -> None:
        registered = self.service.register("Ada", "ada@example.com", "secret1")

        result = self.service.login("ada@example.com", "secret1")

        self.assertEqual(result.user.id, registered.user.id)
        self.assertTrue(result.access_token)

    def test_email_case_is_ignored(self) -> None:
        registered = self.service.register("Ada", " Ada@Example.COM ", "secret1")

        self.assertEqual(registered.user.email, "ada@example.com")
        result = self.service.login("ADA@example.com", "secret1")
        self.assertEqual(result.user.id, registered.user.id)
        with self.assertRaises(Conflict):
            self.service.register("Ada again", "ada@EXAMPLE.com", "secret1")

    def test_login_with_wrong_password_is_unauthorized(self) -> None:
        self.service.register("Ada", "ada@example.com", "secret1")

        with self.assertRaises(Unauthorized) as ctx:
            self.service.login("ada@example.com", "wrong-password")
        self.assertEqual(ctx.exception.message, "Invalid credentials")

    def test_login_with_unknown_email_is_unauthorized(self) -> None:
        with self.assertRaises(Unauthorized):
            self.service.login("nobody@example.com", "secret1")


class TestPasswordHashing(unittest.TestCase):
    def test_hash_verifies_only_the_original_password(self) -> None:
        with patch.object(settings, "BCRYPT_ROUNDS", 4):
            hashed = hash_password("secret1")
        self.assertNotEqual(hashed, "secret1")
        self.assertTrue(verify_password("secret1", hashed))
        self.assertFalse(verify_password("secret2", hashed))

    def test_malformed_hash_does_not_verify(self) -> None:
        self.assertFalse(verify_password("secret1", "not-a-bcrypt-hash"))


if __name__ == "__main__":
    unittest.main()
