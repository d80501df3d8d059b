from typing import Protocol


class PasswordHasher(Protocol):
    """Turns a plaintext password into its stored form and checks it back."""
    def hash(self, password: str) -> str:
        ...

    def verify(self, password: str, stored: str) -> bool:
        ...
