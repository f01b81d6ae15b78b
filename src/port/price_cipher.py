"""Port definition for the reversible price transform."""

from decimal import Decimal
from typing import Protocol


class PriceCipher(Protocol):
    """Encrypts amounts for storage and reverses the transform on read.

    ``decrypt`` raises DecryptionError for malformed ciphertext or a wrong key.
    """
    def encrypt(self, amount: Decimal) -> str: ...

    def decrypt(self, ciphertext: str) -> Decimal: ...
