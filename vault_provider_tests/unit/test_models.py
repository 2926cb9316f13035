"""Tests for pydantic configuration models."""

import pydantic
import pytest

from vault_provider.models import (
    KVSecretListConfig,
    KVSecretListV2Config,
    MFALoginEnforcementConfig,
    VaultConnectionConfig,
)


class TestVaultConnectionConfig:
    """Test VaultConnectionConfig validation."""

    def test_default_values(self):
        config = VaultConnectionConfig(vault_addr="http://127.0.0.1:8200")
        assert config.auth_method == "token"
        assert config.timeout == 30
        assert config.retries == 2
        assert config.verify is True
        assert config.namespace is None

    def test_trailing_slash_stripped(self):
        config = VaultConnectionConfig(vault_addr="https://vault.example.com:8200/")
        assert config.vault_addr == "https://vault.example.com:8200"

    def test_scheme_required(self):
        with pytest.raises(pydantic.ValidationError):
            VaultConnectionConfig(vault_addr="vault.example.com:8200")

    def test_invalid_auth_method(self):
        with pytest.raises(pydantic.ValidationError):
            VaultConnectionConfig(vault_addr="http://vault:8200", auth_method="ldap")

    def test_retries_bounds(self):
        with pytest.raises(pydantic.ValidationError):
            VaultConnectionConfig(vault_addr="http://vault:8200", retries=11)

    def test_has_credentials(self):
        assert VaultConnectionConfig(vault_addr="http://v:8200", token="t").has_credentials()
        assert not VaultConnectionConfig(vault_addr="http://v:8200").has_credentials()
        assert not VaultConnectionConfig(
            vault_addr="http://v:8200", auth_method="approle", role_id="r"
        ).has_credentials()
        assert VaultConnectionConfig(
            vault_addr="http://v:8200", auth_method="approle", role_id="r", secret_id="s"
        ).has_credentials()
        assert VaultConnectionConfig(
            vault_addr="http://v:8200", auth_method="kubernetes"
        ).has_credentials()


class TestMFALoginEnforcementConfig:
    """Test MFALoginEnforcementConfig validation."""

    def test_lists_coerced_to_sets(self):
        config = MFALoginEnforcementConfig(
            name="enf",
            mfa_method_ids=["m1", "m1", "m2"],
            auth_method_types=["userpass"],
        )
        assert config.mfa_method_ids == frozenset({"m1", "m2"})
        assert config.auth_method_types == frozenset({"userpass"})

    def test_optional_sets_default_to_absent(self):
        config = MFALoginEnforcementConfig(name="enf", mfa_method_ids=["m1"])
        assert config.auth_method_accessors is None
        assert config.auth_method_types is None
        assert config.identity_group_ids is None
        assert config.identity_entity_ids is None

    def test_name_required(self):
        with pytest.raises(pydantic.ValidationError):
            MFALoginEnforcementConfig(mfa_method_ids=["m1"])

    def test_name_trailing_slash_rejected(self):
        with pytest.raises(pydantic.ValidationError, match="cannot end with"):
            MFALoginEnforcementConfig(name="enf/", mfa_method_ids=["m1"])

    def test_mfa_method_ids_required(self):
        with pytest.raises(pydantic.ValidationError):
            MFALoginEnforcementConfig(name="enf")

    def test_mfa_method_ids_not_empty(self):
        with pytest.raises(pydantic.ValidationError):
            MFALoginEnforcementConfig(name="enf", mfa_method_ids=[])


class TestKVSecretListConfigs:
    """Test data source input models."""

    def test_path_required(self):
        with pytest.raises(pydantic.ValidationError):
            KVSecretListConfig(path="")

    def test_v2_name_optional(self):
        config = KVSecretListV2Config(mount="kvv2")
        assert config.name is None
