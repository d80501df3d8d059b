"""Plaintext password storage.

Weakest baseline: the password is stored exactly as supplied. Only used
when AUTH_STRATEGY=plaintext.
"""

import hmac


class PlaintextPasswordHasher:
    def hash(self, password: str) -> str:
        return password

    def verify(self, password: str, stored: str) -> bool:
        if stored is None:
            return False
        return hmac.compare_digest(password.encode('utf-8'), stored.encode('utf-8'))
