"""Field encryption for diary content at rest (Fernet)."""

import base64

from cryptography.fernet import Fernet, InvalidToken
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from diary.core.config import Settings

DECRYPTION_ERROR_MSG = "Failed to decrypt diary content - invalid or corrupted data"


class FieldEncryptor:
    """Encrypt/decrypt text fields using Fernet (key derived from app secret)."""

    def __init__(self, settings: Settings) -> None:
        self._fernet = Fernet(self._derive_key(settings))

    @staticmethod
    def _derive_key(settings: Settings) -> bytes:
        """Derive 32-byte key from secret_key + encryption_salt via PBKDF2-HMAC-SHA256."""
        kdf = PBKDF2HMAC(
            algorithm=hashes.SHA256(),
            length=32,
            salt=settings.encryption_salt.get_secret_value().encode(),
            iterations=100_000,
        )
        derived = kdf.derive(settings.secret_key.get_secret_value().encode())
        return base64.urlsafe_b64encode(derived)

    def encrypt(self, plaintext: str) -> str:
        """Encrypt text to a string safe for storage."""
        return self._fernet.encrypt(plaintext.encode()).decode()

    def decrypt(self, ciphertext: str) -> str:
        """Decrypt stored string back to text.

        Raises:
            ValueError: If the ciphertext is invalid or was made with another key.
        """
        try:
            return self._fernet.decrypt(ciphertext.encode()).decode()
        except InvalidToken as e:
            raise ValueError(DECRYPTION_ERROR_MSG) from e
