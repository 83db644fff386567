# core/file_envelope.py

"""
Password-based file envelope.

Layout (big-endian)::

    "ENCFILE1" | salt (16) | iv (12) | name length (uint32) | name (UTF-8) | ciphertext+tag

The key is PBKDF2-HMAC-SHA256 over the passphrase, the cipher AES-256-GCM.
"""

import os
import struct
from typing import Tuple

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from ..utils.exceptions import DecryptionError, InvalidEnvelopeError, ValidationFailure

MAGIC = b"ENCFILE1"
SALT_SIZE = 16
IV_SIZE = 12
KEY_SIZE = 32
NAME_LENGTH_SIZE = 4
HEADER_SIZE = len(MAGIC) + SALT_SIZE + IV_SIZE + NAME_LENGTH_SIZE
DEFAULT_ITERATIONS = 150000


def derive_key(passphrase: str, salt: bytes, iterations: int = DEFAULT_ITERATIONS) -> bytes:
    """Derive the 256-bit AES key from a passphrase"""
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=KEY_SIZE,
        salt=salt,
        iterations=iterations,
    )
    return kdf.derive(passphrase.encode("utf-8"))


def encrypt_file(
    data: bytes,
    filename: str,
    passphrase: str,
    iterations: int = DEFAULT_ITERATIONS,
) -> bytes:
    """
    Encrypt file contents into an envelope

    Args:
        data: Plaintext bytes
        filename: Original file name, stored inside the envelope
        passphrase: User passphrase
        iterations: PBKDF2 iteration count

    Returns:
        Envelope bytes
    """
    if not passphrase:
        raise ValidationFailure("Enter a passphrase")

    salt = os.urandom(SALT_SIZE)
    iv = os.urandom(IV_SIZE)
    key = derive_key(passphrase, salt, iterations)
    ciphertext = AESGCM(key).encrypt(iv, data, None)

    name_bytes = filename.encode("utf-8")
    return b"".join(
        [MAGIC, salt, iv, struct.pack(">I", len(name_bytes)), name_bytes, ciphertext]
    )


def decrypt_file(
    blob: bytes,
    passphrase: str,
    iterations: int = DEFAULT_ITERATIONS,
) -> Tuple[str, bytes]:
    """
    Decrypt an envelope

    Args:
        blob: Envelope bytes
        passphrase: User passphrase
        iterations: PBKDF2 iteration count

    Returns:
        Tuple of (original filename, plaintext bytes)

    Raises:
        InvalidEnvelopeError: Wrong magic, truncated header or bad name length
        DecryptionError: Wrong passphrase or tampered ciphertext
    """
    if not passphrase:
        raise ValidationFailure("Enter a passphrase")

    if blob[: len(MAGIC)] != MAGIC:
        raise InvalidEnvelopeError("Invalid file format")
    if len(blob) < HEADER_SIZE:
        raise InvalidEnvelopeError("Invalid file format: truncated header")

    offset = len(MAGIC)
    salt = blob[offset : offset + SALT_SIZE]
    offset += SALT_SIZE
    iv = blob[offset : offset + IV_SIZE]
    offset += IV_SIZE
    (name_length,) = struct.unpack(">I", blob[offset : offset + NAME_LENGTH_SIZE])
    offset += NAME_LENGTH_SIZE

    if offset + name_length > len(blob):
        raise InvalidEnvelopeError("Invalid file format: filename length out of range")

    try:
        filename = blob[offset : offset + name_length].decode("utf-8")
    except UnicodeDecodeError:
        raise InvalidEnvelopeError("Invalid file format: filename is not UTF-8")
    ciphertext = blob[offset + name_length :]

    key = derive_key(passphrase, salt, iterations)
    try:
        data = AESGCM(key).decrypt(iv, ciphertext, None)
    except InvalidTag:
        raise DecryptionError("Decryption failed. Wrong passphrase or corrupted file.")

    return filename, data


def looks_like_pdf(data: bytes) -> bool:
    return data[:4] == b"%PDF"
