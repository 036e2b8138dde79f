"""Security adapters: secret hashing."""

from authmgmt.infrastructure.security.bcrypt_secret_hasher import BcryptSecretHasher

__all__ = ["BcryptSecretHasher"]
