"""Password hashing utilities."""
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

from pictureteam.constants import PASSWORD_SALT_BYTES

# Argon2id with a fresh random salt per hash; the parameters are embedded
# in the encoded output so old hashes stay verifiable if the defaults change.
_hasher = PasswordHasher(salt_len=PASSWORD_SALT_BYTES)


def hash_password(password: str) -> str:
    """
    Hash a password using Argon2id.

    Args:
        password: The password to hash

    Returns:
        PHC-encoded hash string ($argon2id$v=19$m=...,t=...,p=...$salt$hash)
    """
    return _hasher.hash(password)


def verify_password(password_hash: str, password: str) -> bool:
    """
    Verify a password against an encoded Argon2 hash.

    A malformed hash and a mismatch are both reported as ``False``.

    Args:
        password_hash: The stored encoded hash
        password: The password to verify

    Returns:
        True if the password matches, False otherwise
    """
    try:
        return _hasher.verify(password_hash, password)
    except (VerificationError, InvalidHashError):
        return False
