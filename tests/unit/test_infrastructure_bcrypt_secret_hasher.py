"""Unit tests for BcryptSecretHasher.

Tests cover:
- Cost factor guard
- Hash format and salting
- Compare: match, mismatch, malformed digest
"""

import pytest

from authmgmt.infrastructure.security import BcryptSecretHasher


@pytest.mark.unit
class TestCostFactor:
    """Test cost factor validation."""

    @pytest.mark.parametrize("cost", [9, 21])
    def test_out_of_range_cost_raises(self, cost):
        with pytest.raises(ValueError):
            BcryptSecretHasher(cost_factor=cost)

    async def test_digest_embeds_cost(self, hasher):
        digest = await hasher.hash("SecurePass123!")

        assert digest.startswith("$2b$10$")
        assert len(digest) == 60


@pytest.mark.unit
class TestHashAndCompare:
    """Test hashing and comparison."""

    async def test_same_secret_hashes_differently(self, hasher):
        first = await hasher.hash("SecurePass123!")
        second = await hasher.hash("SecurePass123!")

        assert first != second

    async def test_compare_matches_original_secret(self, hasher):
        digest = await hasher.hash("id___S1")

        assert await hasher.compare("id___S1", digest) is True

    async def test_compare_rejects_other_secret(self, hasher):
        digest = await hasher.hash("id___S1")

        assert await hasher.compare("id___S2", digest) is False

    async def test_compare_malformed_digest_returns_false(self, hasher):
        assert await hasher.compare("secret", "not-a-bcrypt-digest") is False
