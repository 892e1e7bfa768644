from __future__ import annotations

import bcrypt

from ..core.constants import DEFAULT_BCRYPT_ROUNDS


class PasswordHasher:
    """bcrypt hashing with a configurable cost factor."""

    def __init__(self, rounds: int = DEFAULT_BCRYPT_ROUNDS):
        self._rounds = int(rounds)

    def hash(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("ascii")

    def verify(self, password: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("ascii"))
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            return False
