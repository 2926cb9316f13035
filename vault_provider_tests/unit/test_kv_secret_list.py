"""Tests for the KV secret listing data sources."""

import pytest
from unittest.mock import Mock
from hvac.exceptions import Forbidden

from vault_provider.data_sources import KVSecretListDataSource, KVSecretListV2DataSource
from vault_provider.exceptions import BackendError, ValidationError


@pytest.fixture
def kv_mount(fake_hvac):
    """KV v1 mount with leaf secrets foo and bar plus a secret nested under bar/."""
    fake_hvac.storage.update({
        "tf-kv/foo": {"zip": "zap", "foo": "bar"},
        "tf-kv/bar": {"zip": "zap", "foo": "bar"},
        "tf-kv/bar/biz": {"zip": "zap", "foo": "bar"},
    })
    return "tf-kv"


class TestKVSecretListDataSource:
    """Test vault_kv_secret_list."""

    def test_lists_mount(self, vault_client, kv_mount):
        data_source = KVSecretListDataSource(vault_client)

        state = data_source.read({"path": kv_mount})

        assert state.id == "tf-kv"
        assert state.values["path"] == "tf-kv"
        assert state.values["names"] == ["bar", "bar/", "foo"]

    def test_nested_path(self, vault_client, kv_mount):
        state = KVSecretListDataSource(vault_client).read({"path": "tf-kv/bar"})
        assert state.values["names"] == ["biz"]

    def test_backend_order_is_preserved(self, vault_client, fake_hvac):
        fake_hvac.list = Mock(return_value={"data": {"keys": ["zeta", "alpha/", "alpha", "alpha"]}})

        state = KVSecretListDataSource(vault_client).read({"path": "kv"})

        assert state.values["names"] == ["zeta", "alpha/", "alpha", "alpha"]

    def test_absent_path_lists_nothing(self, vault_client):
        state = KVSecretListDataSource(vault_client).read({"path": "empty-mount"})
        assert state.values["names"] == []

    def test_single_list_call(self, vault_client, fake_hvac, kv_mount):
        KVSecretListDataSource(vault_client).read({"path": kv_mount})
        assert fake_hvac.calls == [("list", "tf-kv")]

    def test_backend_error(self, vault_client, fake_hvac):
        fake_hvac.list = Mock(side_effect=Forbidden("permission denied"))

        with pytest.raises(BackendError, match="permission denied"):
            KVSecretListDataSource(vault_client).read({"path": "kv"})

    def test_path_required(self, vault_client, fake_hvac):
        with pytest.raises(ValidationError):
            KVSecretListDataSource(vault_client).read({})
        assert fake_hvac.calls == []

    def test_schema(self):
        attributes = KVSecretListDataSource.schema()["attributes"]
        assert attributes["path"]["required"]
        assert attributes["names"]["computed"]


class TestKVSecretListV2DataSource:
    """Test vault_kv_secrets_list_v2."""

    @pytest.mark.parametrize(
        "mount,name,expected",
        [
            ("kvv2", None, "kvv2/metadata"),
            ("/kvv2/", None, "kvv2/metadata"),
            ("kvv2", "app", "kvv2/metadata/app"),
            ("kvv2", "/app/db/", "kvv2/metadata/app/db"),
            ("kvv2", "/", "kvv2/metadata"),
        ],
    )
    def test_metadata_path(self, mount, name, expected):
        assert KVSecretListV2DataSource.metadata_path(mount, name) == expected

    def test_lists_metadata(self, vault_client, fake_hvac):
        fake_hvac.storage.update({
            "kvv2/metadata/app/db": {},
            "kvv2/metadata/app/api/key": {},
        })

        state = KVSecretListV2DataSource(vault_client).read({"mount": "kvv2", "name": "app"})

        assert state.id == "kvv2/metadata/app"
        assert state.values == {
            "mount": "kvv2",
            "name": "app",
            "path": "kvv2/metadata/app",
            "names": ["api/", "db"],
        }
