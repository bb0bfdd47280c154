import base64
import logging
import os
from typing import MutableMapping, Optional, Protocol
from cryptography.fernet import Fernet, InvalidToken
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC


logger = logging.getLogger(__name__)

GITHUB_TOKEN_ACCOUNT = "githubToken"


class TokenStore(Protocol):
    """Key-value secret store keyed by account name."""

    def get(self, account: str) -> Optional[str]: ...

    def set(self, account: str, value: str) -> None: ...

    def delete(self, account: str) -> None: ...


class TokenEncryption:
    """Handles encryption and decryption of GitHub access tokens."""

    def __init__(self, encryption_key: Optional[str] = None):
        """Initialize with a password-derived key, or a random key when none is given."""
        if encryption_key:
            self._fernet = Fernet(self._derive_key(encryption_key))
        else:
            self._fernet = Fernet(Fernet.generate_key())

    def _derive_key(self, password: str) -> bytes:
        """Derive encryption key from password using PBKDF2."""
        salt = b'prwatcher-token-salt'
        kdf = PBKDF2HMAC(
            algorithm=hashes.SHA256(),
            length=32,
            salt=salt,
            iterations=100000,
        )
        return base64.urlsafe_b64encode(kdf.derive(password.encode()))

    def encrypt_token(self, token: str) -> bytes:
        return self._fernet.encrypt(token.encode())

    def decrypt_token(self, encrypted_token: bytes) -> str:
        return self._fernet.decrypt(encrypted_token).decode()


class EncryptedTokenStore:
    """
    Secret store that only holds Fernet-encrypted values.

    By default values live in a dict in this process and are lost on exit.
    Pass a persistent mapping (for example a shelve.Shelf) as backing to keep
    them across runs. Without PRWATCHER_TOKEN_ENCRYPTION_KEY the key is random
    per process, so persisted values are only readable again when that key is
    configured.
    """

    def __init__(
        self,
        encryptor: Optional[TokenEncryption] = None,
        backing: Optional[MutableMapping[str, bytes]] = None,
    ):
        self._encryptor = encryptor or create_token_encryptor()
        self._items: MutableMapping[str, bytes] = {} if backing is None else backing

    def get(self, account: str) -> Optional[str]:
        encrypted = self._items.get(account)
        if encrypted is None:
            return None
        try:
            return self._encryptor.decrypt_token(encrypted)
        except InvalidToken:
            logger.error(f"Stored secret for account {account} could not be decrypted")
            return None

    def set(self, account: str, value: str) -> None:
        # Replace, never append
        self.delete(account)
        self._items[account] = self._encryptor.encrypt_token(value)

    def delete(self, account: str) -> None:
        self._items.pop(account, None)


def get_encryption_key() -> Optional[str]:
    """Get encryption key from environment variable, None if unset."""
    return os.getenv('PRWATCHER_TOKEN_ENCRYPTION_KEY') or None


def create_token_encryptor() -> TokenEncryption:
    """Create a TokenEncryption instance with the configured key."""
    return TokenEncryption(get_encryption_key())
