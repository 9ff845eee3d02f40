"""Password credential hashing.

Credentials are stored as ``"<salt-hex>:<key-hex>"``. The key is derived
with scrypt over the password, using the hex text of a fresh random salt
as the scrypt salt. A credential is always replaced wholesale; salt and
key are never updated separately.
"""

import hmac
import logging
import os
from typing import Optional

from cryptography.hazmat.primitives.kdf.scrypt import Scrypt

logger = logging.getLogger(__name__)

SEPARATOR = ":"


class PasswordHasher:
    """Salted scrypt hashing with constant-time verification."""

    def __init__(
        self,
        n: int = 16384,
        r: int = 8,
        p: int = 1,
        key_length: int = 64,
        salt_length: int = 32,
    ):
        self.n = n
        self.r = r
        self.p = p
        self.key_length = key_length
        self.salt_length = salt_length

    @classmethod
    def from_settings(cls, settings) -> "PasswordHasher":
        return cls(
            n=settings.scrypt_n,
            r=settings.scrypt_r,
            p=settings.scrypt_p,
            key_length=settings.scrypt_key_length,
            salt_length=settings.scrypt_salt_length,
        )

    def _derive(self, password: str, salt: str) -> bytes:
        kdf = Scrypt(
            salt=salt.encode("utf-8"),
            length=self.key_length,
            n=self.n,
            r=self.r,
            p=self.p,
        )
        return kdf.derive(password.encode("utf-8"))

    def hash(self, password: str) -> str:
        """Hash a password with a freshly generated salt.

        Accepts any string, including the empty one; length policy belongs
        to the caller.
        """
        salt = os.urandom(self.salt_length).hex()
        derived_key = self._derive(password, salt)
        return f"{salt}{SEPARATOR}{derived_key.hex()}"

    def verify(self, password: str, credential: Optional[str]) -> bool:
        """Check a password against a stored credential.

        Malformed credentials fail closed and return False.
        """
        if not credential or SEPARATOR not in credential:
            return False

        salt, _, key = credential.partition(SEPARATOR)
        if not salt or not key:
            return False

        try:
            expected_key = bytes.fromhex(key)
        except ValueError:
            logger.warning("Stored credential has a non-hex key")
            return False

        derived_key = self._derive(password, salt)
        return hmac.compare_digest(derived_key, expected_key)


_default_hasher = PasswordHasher()


def hash_password(password: str) -> str:
    """Hash a password with the default cost parameters."""
    return _default_hasher.hash(password)


def verify_password(password: str, credential: Optional[str]) -> bool:
    """Verify a password with the default cost parameters."""
    return _default_hasher.verify(password, credential)
