"""Price cipher implementations.

FernetPriceCipher is the default: AES-128-CBC with a random IV per call and an
HMAC-SHA256 tag, so a wrong key or tampered ciphertext always fails.

LegacyPriceCipher reproduces the format written by the previous Node.js
service (``crypto.createCipher('aes-256-cbc', passphrase)``): key and IV are
derived from the passphrase alone with OpenSSL's EVP_BytesToKey (MD5, one
round, no salt) and the output is hex. It is deterministic and
unauthenticated; it exists so old records stay readable until they are
re-encrypted with scripts/migrate_price_cipher.py.
"""

import base64
import hashlib
import logging
from decimal import Decimal, InvalidOperation

from cryptography.fernet import Fernet, InvalidToken
from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from domain.model.errors import DecryptionError, ValidationError
from domain.model.price import format_amount, to_amount

logger = logging.getLogger(__name__)


def _parse_plaintext(plain: bytes) -> Decimal:
    try:
        return to_amount(Decimal(plain.decode('utf-8').strip()))
    except (UnicodeDecodeError, InvalidOperation, ValidationError) as e:
        raise DecryptionError("Decrypted price is not a valid amount") from e


class FernetPriceCipher:
    def __init__(self, secret: str):
        if not secret:
            raise ValueError("Price encryption secret is required")
        key = base64.urlsafe_b64encode(hashlib.sha256(secret.encode('utf-8')).digest())
        self._fernet = Fernet(key)

    def encrypt(self, amount: Decimal) -> str:
        return self._fernet.encrypt(format_amount(amount).encode('utf-8')).decode('ascii')

    def decrypt(self, ciphertext: str) -> Decimal:
        if not isinstance(ciphertext, str) or not ciphertext:
            raise DecryptionError("Price ciphertext is empty")
        try:
            plain = self._fernet.decrypt(ciphertext.encode('utf-8'))
        except InvalidToken as e:
            raise DecryptionError("Price ciphertext is invalid or was encrypted with another key") from e
        return _parse_plaintext(plain)


def evp_bytes_to_key(passphrase: bytes, key_len: int = 32, iv_len: int = 16) -> tuple[bytes, bytes]:
    """OpenSSL EVP_BytesToKey with MD5, one iteration and no salt."""
    derived = b''
    block = b''
    while len(derived) < key_len + iv_len:
        block = hashlib.md5(block + passphrase).digest()
        derived += block
    return derived[:key_len], derived[key_len:key_len + iv_len]


class LegacyPriceCipher:
    def __init__(self, secret: str):
        if not secret:
            raise ValueError("Price encryption secret is required")
        self._key, self._iv = evp_bytes_to_key(secret.encode('utf-8'))

    def _cipher(self) -> Cipher:
        return Cipher(algorithms.AES(self._key), modes.CBC(self._iv))

    def encrypt(self, amount: Decimal) -> str:
        padder = padding.PKCS7(algorithms.AES.block_size).padder()
        data = padder.update(format_amount(amount).encode('utf-8')) + padder.finalize()
        encryptor = self._cipher().encryptor()
        return (encryptor.update(data) + encryptor.finalize()).hex()

    def decrypt(self, ciphertext: str) -> Decimal:
        if not isinstance(ciphertext, str) or not ciphertext:
            raise DecryptionError("Price ciphertext is empty")
        try:
            raw = bytes.fromhex(ciphertext)
        except ValueError as e:
            raise DecryptionError("Price ciphertext is not hex encoded") from e
        if len(raw) % 16:
            raise DecryptionError("Price ciphertext has an invalid length")

        decryptor = self._cipher().decryptor()
        padded = decryptor.update(raw) + decryptor.finalize()
        unpadder = padding.PKCS7(algorithms.AES.block_size).unpadder()
        try:
            plain = unpadder.update(padded) + unpadder.finalize()
        except ValueError as e:
            raise DecryptionError("Price ciphertext is invalid or was encrypted with another key") from e
        return _parse_plaintext(plain)


def build_price_cipher(mode: str, secret: str):
    """Return the cipher for PRICE_CIPHER_MODE ('fernet' or 'legacy')."""
    if mode == 'fernet':
        return FernetPriceCipher(secret)
    if mode == 'legacy':
        logger.warning(
            "Using legacy price cipher (deterministic, unauthenticated). "
            "Run scripts/migrate_price_cipher.py and switch PRICE_CIPHER_MODE to 'fernet'."
        )
        return LegacyPriceCipher(secret)
    raise ValueError(f"Unknown price cipher mode: {mode!r}")
