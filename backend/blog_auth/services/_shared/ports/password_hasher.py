from __future__ import annotations

from typing import Protocol


class PasswordHasher(Protocol):
    """Salted, cost-tunable one-way hash with a constant-time verify."""

    def hash(self, plaintext: str) -> str: ...

    def verify(self, plaintext: str, digest: str) -> bool: ...
