"""Password/refresh-token hashing via :mod:`werkzeug.security`."""

from __future__ import annotations

from dataclasses import dataclass

from werkzeug.security import check_password_hash, generate_password_hash

from blog_auth.services._shared.ports import PasswordHasher


@dataclass(frozen=True, slots=True)
class WerkzeugHasher(PasswordHasher):
    """
    Salted hash with a cost encoded in the method string.

    Examples of ``method``: ``"scrypt"``, ``"pbkdf2:sha256:600000"``. The
    digest embeds method and salt, so changing ``method`` keeps old digests
    verifiable. No 72-byte input truncation (JWTs share long prefixes).
    """

    method: str = "scrypt"
    salt_length: int = 16

    def hash(self, plaintext: str) -> str:
        return generate_password_hash(plaintext, method=self.method, salt_length=self.salt_length)

    def verify(self, plaintext: str, digest: str) -> bool:
        # check_password_hash compares with hmac.compare_digest
        return check_password_hash(digest, plaintext)
