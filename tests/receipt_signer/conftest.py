"""Shared pytest fixtures for receipt_signer tests."""

from __future__ import annotations

import random

import pytest

from receipt_signer import Address, KeyStore, SigningService, VerificationService
from tests.receipt_signer.helpers import TEST_ADDRESS, TEST_PRIVATE_KEY


@pytest.fixture
def keystore() -> KeyStore:
    """KeyStore holding the fixed test key."""
    return KeyStore.create(TEST_PRIVATE_KEY)


@pytest.fixture
def test_address() -> Address:
    """Address of the fixed test key."""
    return Address.decode(TEST_ADDRESS)


@pytest.fixture
def random_keystore() -> KeyStore:
    """KeyStore with a key drawn from a seeded generator."""
    return KeyStore.create(rng=random.Random(1234))


@pytest.fixture
def signer(keystore: KeyStore) -> SigningService:
    """Signing service over the fixed test key."""
    return SigningService(keystore)


@pytest.fixture
def verifier(keystore: KeyStore) -> VerificationService:
    """Verification service over the fixed test key."""
    return VerificationService(keystore)
