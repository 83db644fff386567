# core/text_cipher.py

"""
Passphrase text encryption interoperable with CryptoJS ``AES.encrypt(text, pass)``.

Output is base64 of ``"Salted__" | salt (8) | AES-256-CBC ciphertext``; key and
IV come from OpenSSL's EVP_BytesToKey with MD5 and a single iteration.
"""

import base64
import binascii
import os
from typing import Tuple

from cryptography.hazmat.primitives import hashes, padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from ..utils.exceptions import DecryptionError, ValidationFailure

SALTED_PREFIX = b"Salted__"
SALT_SIZE = 8
KEY_SIZE = 32
IV_SIZE = 16


def evp_bytes_to_key(passphrase: bytes, salt: bytes) -> Tuple[bytes, bytes]:
    derived = b""
    block = b""
    while len(derived) < KEY_SIZE + IV_SIZE:
        digest = hashes.Hash(hashes.MD5())
        digest.update(block + passphrase + salt)
        block = digest.finalize()
        derived += block
    return derived[:KEY_SIZE], derived[KEY_SIZE : KEY_SIZE + IV_SIZE]


def encrypt_text(text: str, passphrase: str) -> str:
    """
    Encrypt text with a passphrase

    Args:
        text: Plain text
        passphrase: User passphrase

    Returns:
        Base64 ciphertext
    """
    if not text or not passphrase:
        raise ValidationFailure("Enter text and a passphrase")

    salt = os.urandom(SALT_SIZE)
    key, iv = evp_bytes_to_key(passphrase.encode("utf-8"), salt)

    padder = padding.PKCS7(128).padder()
    padded = padder.update(text.encode("utf-8")) + padder.finalize()
    encryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).encryptor()
    ciphertext = encryptor.update(padded) + encryptor.finalize()

    return base64.b64encode(SALTED_PREFIX + salt + ciphertext).decode("ascii")


def decrypt_text(ciphertext: str, passphrase: str) -> str:
    """
    Decrypt base64 ciphertext produced by ``encrypt_text`` or CryptoJS

    Raises:
        ValidationFailure: Empty input
        DecryptionError: Undecodable input or wrong passphrase
    """
    if not ciphertext or not passphrase:
        raise ValidationFailure("Enter text and a passphrase")

    try:
        raw = base64.b64decode(ciphertext.strip(), validate=True)
    except (binascii.Error, ValueError):
        raise DecryptionError("Decryption failed. Input is not valid ciphertext.")

    body = raw[len(SALTED_PREFIX) + SALT_SIZE :]
    if (
        not raw.startswith(SALTED_PREFIX)
        or not body
        or len(body) % (algorithms.AES.block_size // 8)
    ):
        raise DecryptionError("Decryption failed. Input is not valid ciphertext.")

    salt = raw[len(SALTED_PREFIX) : len(SALTED_PREFIX) + SALT_SIZE]
    key, iv = evp_bytes_to_key(passphrase.encode("utf-8"), salt)

    try:
        decryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).decryptor()
        padded = decryptor.update(body) + decryptor.finalize()
        unpadder = padding.PKCS7(128).unpadder()
        plain = unpadder.update(padded) + unpadder.finalize()
        return plain.decode("utf-8")
    except (ValueError, UnicodeDecodeError):
        raise DecryptionError("Decryption failed. Check the passphrase.")
