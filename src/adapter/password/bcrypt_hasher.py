"""Salted bcrypt password hashing."""

import bcrypt

# Cost factor 10 (2^10 iterations)
BCRYPT_ROUNDS = 10


class BcryptPasswordHasher:
    def __init__(self, rounds: int = BCRYPT_ROUNDS):
        self.rounds = rounds

    def hash(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(password.encode('utf-8'), salt).decode('utf-8')

    def verify(self, password: str, stored: str) -> bool:
        if not stored:
            return False
        try:
            return bcrypt.checkpw(password.encode('utf-8'), stored.encode('utf-8'))
        except ValueError:
            # stored value is not a bcrypt hash (e.g. left over from plaintext mode)
            return False
