from __future__ import annotations

from src.task_tracker.task_tracker.auth.passwords import PasswordHasher


def test_password_hash_uses_bcrypt_and_verifies():
    hasher = PasswordHasher(rounds=4)

    hashed = hasher.hash("secret123")

    assert hashed.startswith("$2b$04$")
    assert hasher.verify("secret123", hashed)
    assert not hasher.verify("wrong", hashed)


def test_malformed_stored_hash_never_verifies():
    assert not PasswordHasher(rounds=4).verify("secret123", "CHANGE_ME")


def test_default_cost_factor_is_12():
    assert PasswordHasher().hash("secret123").startswith("$2b$12$")
