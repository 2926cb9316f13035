"""Fixtures for tests that run against a real Vault server.

Set TF_ACC=1 together with VAULT_ADDR and VAULT_TOKEN (a root or
sufficiently privileged token) to enable them.
"""

import os
import uuid

import pytest

from vault_provider import config
from vault_provider.client import VaultClient
from vault_provider.provider import Provider


@pytest.fixture
def random_name():
    """Return a factory for unique object names."""
    return lambda prefix: f"{prefix}-{uuid.uuid4().hex[:10]}"


@pytest.fixture(autouse=True)
def require_acceptance_env():
    if not config.TF_ACC:
        pytest.skip("TF_ACC is not set")
    missing = [name for name in ("VAULT_ADDR", "VAULT_TOKEN") if not os.environ.get(name)]
    if missing:
        pytest.skip(f"{', '.join(missing)} must be set for acceptance tests")


@pytest.fixture
def live_client():
    with VaultClient(config.connection_config_from_env()) as client:
        yield client


@pytest.fixture
def live_provider(live_client):
    return Provider(live_client)
