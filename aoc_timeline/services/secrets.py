"""Encrypted storage for the session cookie"""
import json
import logging
import os
from typing import Dict

from cryptography.fernet import Fernet, InvalidToken

from aoc_timeline.config import Settings

logger = logging.getLogger(__name__)

SESSION_SECRET = 'session'


class SecretsError(Exception):
    """Base exception for secret store errors"""
    pass


class SecretStore:
    """
    JSON file of named secrets, each encrypted with a symmetric key file.

    The key file is kept apart from the store so the store itself can be
    committed or shared without exposing the values.
    """

    def __init__(self, path: str, key_path: str):
        self.path = path
        self.key_path = key_path

    @staticmethod
    def generate_key(key_path: str) -> None:
        """Write a new random key, readable by the owner only"""
        with open(key_path, 'wb') as f:
            f.write(Fernet.generate_key())
        os.chmod(key_path, 0o600)
        logger.info(f"Generated new secrets key at {key_path}")

    def _fernet(self) -> Fernet:
        try:
            with open(self.key_path, 'rb') as f:
                return Fernet(f.read().strip())
        except (OSError, ValueError) as e:
            raise SecretsError(f"Cannot load secrets key {self.key_path}: {e}") from e

    def _load(self) -> Dict[str, str]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise SecretsError(f"Cannot read secrets file {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise SecretsError(f"Secrets file {self.path} is not a mapping")
        return data

    def get(self, name: str) -> str:
        """Decrypt a named secret"""
        secrets = self._load()
        if name not in secrets:
            raise SecretsError(f"Secret '{name}' not found in {self.path}")
        try:
            return self._fernet().decrypt(secrets[name].encode()).decode()
        except InvalidToken as e:
            raise SecretsError(f"Secret '{name}' cannot be decrypted with {self.key_path}") from e

    def set(self, name: str, value: str) -> None:
        """Encrypt and store a named secret, keeping the others"""
        secrets = self._load()
        secrets[name] = self._fernet().encrypt(value.encode()).decode()
        with open(self.path, 'w', encoding='utf-8') as f:
            json.dump(secrets, f, indent=2)
        logger.info(f"Stored secret '{name}' in {self.path}")


def resolve_session_token(settings: Settings) -> str:
    """
    Session cookie from the AOC_SESSION setting, falling back to the store.

    Raises:
        SecretsError: If neither source provides a token
    """
    if settings.AOC_SESSION:
        return settings.AOC_SESSION

    store = SecretStore(settings.SECRETS_FILE, settings.SECRETS_KEY_FILE)
    return store.get(SESSION_SECRET)


def store_session_token(session: str, secrets_file: str, key_file: str) -> bool:
    """
    Encrypt the session cookie into the store, creating the key on first use.

    Returns:
        bool: True when a new key file was generated
    """
    created = False
    if not os.path.exists(key_file):
        SecretStore.generate_key(key_file)
        created = True

    SecretStore(secrets_file, key_file).set(SESSION_SECRET, session)
    return created
