"""Shared fixtures: an in-memory stand-in for ``hvac.Client``."""

import pytest
from unittest.mock import MagicMock, patch
from hvac.exceptions import InvalidPath

from vault_provider.client import VaultClient
from vault_provider.models import VaultConnectionConfig
from vault_provider.provider import Provider

LOGIN_ENFORCEMENT_PREFIX = "identity/mfa/login-enforcement/"
LOGIN_ENFORCEMENT_LIST_KEYS = (
    "mfa_method_ids",
    "auth_method_accessors",
    "auth_method_types",
    "identity_group_ids",
    "identity_entity_ids",
)


class FakeHvacClient:
    """Keeps Vault's logical key space in a dict and records every call."""

    def __init__(self):
        self.token = None
        self.storage = {}
        self.calls = []
        self.auth = MagicMock()
        self.adapter = MagicMock()

    def write_data(self, path, *, data=None, wrap_ttl=None):
        self.calls.append(("write", path, data))
        stored = dict(data or {})
        if path.startswith(LOGIN_ENFORCEMENT_PREFIX):
            # Vault echoes the enforcement back with every list present
            stored["name"] = path[len(LOGIN_ENFORCEMENT_PREFIX):]
            for key in LOGIN_ENFORCEMENT_LIST_KEYS:
                stored.setdefault(key, [])
            stored.setdefault("id", f"id-{stored['name']}")
            stored.setdefault("namespace_id", "root")
        self.storage[path] = stored
        return None

    def read(self, path, wrap_ttl=None):
        self.calls.append(("read", path))
        if path not in self.storage:
            return None
        return {"request_id": "req-1", "data": dict(self.storage[path])}

    def delete(self, path):
        self.calls.append(("delete", path))
        if path not in self.storage:
            raise InvalidPath(f"no handler for route {path!r}")
        del self.storage[path]

    def list(self, path):
        self.calls.append(("list", path))
        prefix = path.rstrip("/") + "/"
        keys = set()
        for stored_path in self.storage:
            if not stored_path.startswith(prefix):
                continue
            rest = stored_path[len(prefix):]
            if "/" in rest:
                keys.add(rest.split("/", 1)[0] + "/")
            else:
                keys.add(rest)
        if not keys:
            return None
        return {"data": {"keys": sorted(keys)}}

    def operations(self, kind):
        return [call for call in self.calls if call[0] == kind]


@pytest.fixture(autouse=True)
def fast_retry_sleep(monkeypatch):
    """Eliminate retry backoff delays in tests to keep the suite fast."""
    monkeypatch.setattr("time.sleep", lambda *args, **kwargs: None)


@pytest.fixture
def fake_hvac():
    return FakeHvacClient()


@pytest.fixture
def connection_config():
    return VaultConnectionConfig(
        vault_addr="https://vault.example.com:8200",
        token="hvs.test-token",
        retries=2,
    )


@pytest.fixture
def vault_client(fake_hvac, connection_config):
    """VaultClient whose hvac client is the in-memory fake."""
    with patch("vault_provider.client.hvac.Client", return_value=fake_hvac):
        client = VaultClient(connection_config)
        client._get_client()
    return client


@pytest.fixture
def provider(vault_client):
    return Provider(vault_client)
