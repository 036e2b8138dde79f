"""Secret hashing protocol for domain layer.

One interface for passwords and for stored tokens.
Infrastructure layer provides concrete implementations (bcrypt).

Architecture:
    - Domain defines protocol (port)
    - Infrastructure implements adapter (BcryptSecretHasher)
    - Async so slow cost-factor hashes never block the event loop
"""

from typing import Protocol


class SecretHasherProtocol(Protocol):
    """Secret hashing and verification interface.

    Implementations:
        - BcryptSecretHasher: bcrypt, cost factor from settings (production)

    Usage:
        digest = await hasher.hash("SecurePass123!")
        matched = await hasher.compare("SecurePass123!", digest)
    """

    async def hash(self, secret: str) -> str:
        """Hash a secret.

        Args:
            secret: Plaintext password or token.

        Returns:
            Salted one-way digest.

        Note:
            - Same secret produces different digests (random salt)
            - Digest cannot be reversed
        """
        ...

    async def compare(self, secret: str, digest: str) -> bool:
        """Check a plaintext secret against a digest.

        Args:
            secret: Plaintext claim.
            digest: Stored digest.

        Returns:
            True if the secret matches, False otherwise (including malformed
            digests).
        """
        ...
