"""Bcrypt secret hashing service (adapter).

Implements SecretHasherProtocol with bcrypt. Used for passwords and for
stored tokens.

Architecture:
    - Implements SecretHasherProtocol (no inheritance required)
    - Structural typing via Protocol
    - bcrypt calls run on a worker thread (asyncio.to_thread) so a ~250ms
      hash never blocks the event loop

Security:
    - Bcrypt with configurable cost factor (12 by default)
    - Random salt per hash
    - Constant-time comparison (bcrypt.checkpw)

Limits:
    - bcrypt only reads the first 72 bytes of a secret. Long tokens are
      ``<id>___<2 * long_token_len hex>``; a UUID id and the default length
      give 69 bytes.
"""

import asyncio

import bcrypt


class BcryptSecretHasher:
    """Bcrypt secret hashing service.

    Usage:
        hasher = BcryptSecretHasher(cost_factor=settings.bcrypt_rounds)

        digest = await hasher.hash("SecurePass123!")
        matched = await hasher.compare("SecurePass123!", digest)
    """

    def __init__(self, cost_factor: int = 12) -> None:
        """Initialize bcrypt secret hasher.

        Args:
            cost_factor: Bcrypt cost factor (default: 12).
                Cost factor is logarithmic: each +1 doubles computation time.
                - 10 = ~60ms
                - 12 = ~250ms (current recommendation)
                - 14 = ~1000ms

        Raises:
            ValueError: If cost factor is outside 10..20.
        """
        if cost_factor < 10:
            msg = "Cost factor must be at least 10 for security"
            raise ValueError(msg)
        if cost_factor > 20:
            msg = "Cost factor above 20 is impractically slow"
            raise ValueError(msg)

        self._cost_factor = cost_factor

    async def hash(self, secret: str) -> str:
        """Hash a secret using bcrypt.

        Args:
            secret: Plaintext password or token.

        Returns:
            Bcrypt digest string ($2b$<cost>$...), 60 characters.
        """
        return await asyncio.to_thread(self._hash_sync, secret)

    async def compare(self, secret: str, digest: str) -> bool:
        """Verify a plaintext secret against a bcrypt digest.

        Args:
            secret: Plaintext claim.
            digest: Stored bcrypt digest.

        Returns:
            True if the secret matches, False otherwise (including invalid
            digest format).
        """
        return await asyncio.to_thread(self._compare_sync, secret, digest)

    def _hash_sync(self, secret: str) -> str:
        salt = bcrypt.gensalt(rounds=self._cost_factor)
        return bcrypt.hashpw(secret.encode("utf-8"), salt).decode("utf-8")

    def _compare_sync(self, secret: str, digest: str) -> bool:
        try:
            # bcrypt.checkpw does constant-time comparison
            return bcrypt.checkpw(secret.encode("utf-8"), digest.encode("utf-8"))
        except (ValueError, AttributeError):
            # Invalid digest format: fail securely
            return False
