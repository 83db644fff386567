# core/passwords.py

"""
PBKDF2-SHA256 password hashes encoded as ``pbkdf2_sha256$<iterations>$<salt_hex>$<hash_hex>``.
"""

import os

from cryptography.exceptions import InvalidKey
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

ALGORITHM = "pbkdf2_sha256"
SALT_SIZE = 16
HASH_SIZE = 32


def _kdf(salt: bytes, iterations: int) -> PBKDF2HMAC:
    return PBKDF2HMAC(
        algorithm=hashes.SHA256(), length=HASH_SIZE, salt=salt, iterations=iterations
    )


def hash_password(password: str, iterations: int = 150000) -> str:
    salt = os.urandom(SALT_SIZE)
    digest = _kdf(salt, iterations).derive(password.encode("utf-8"))
    return f"{ALGORITHM}${iterations}${salt.hex()}${digest.hex()}"


def verify_password(password: str, encoded: str) -> bool:
    """Check a password against an encoded hash in constant time"""
    try:
        algorithm, iterations, salt_hex, hash_hex = encoded.split("$")
        if algorithm != ALGORITHM:
            return False
        salt, expected = bytes.fromhex(salt_hex), bytes.fromhex(hash_hex)
        _kdf(salt, int(iterations)).verify(password.encode("utf-8"), expected)
        return True
    except (ValueError, InvalidKey):
        return False
