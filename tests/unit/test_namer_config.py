"""Unit tests for the namer config model and schema."""

import pytest
from marshmallow import ValidationError
from lbnamer.types.models import NamerConfig
from lbnamer.types.schemas import NamerConfigSchema


class TestNamerConfigSchema:
    """Tests for NamerConfigSchema."""

    def test_load_uid(self):
        config = NamerConfigSchema().load({"uid": "a1b2c3d4e5f6a7b8"})
        assert isinstance(config, NamerConfig)
        assert config.uid == "a1b2c3d4e5f6a7b8"
        assert config.provider_uid is None
        assert config.firewall_name == ""

    def test_load_provider_uid(self):
        config = NamerConfigSchema().load({"uid": "uid1", "provider-uid": "provider1"})
        assert config.provider_uid == "provider1"
        assert config.firewall_name == "provider1"

    def test_unknown_keys_are_ignored(self):
        config = NamerConfigSchema().load({"uid": "uid1", "other": "value"})
        assert not hasattr(config, "other")

    def test_missing_uid(self):
        with pytest.raises(ValidationError) as exc:
            NamerConfigSchema().load({})
        assert "uid" in exc.value.messages

    def test_invalid_uid(self):
        with pytest.raises(ValidationError) as exc:
            NamerConfigSchema().load({"uid": "Not_Valid"})
        assert "uid" in exc.value.messages

    def test_invalid_provider_uid(self):
        with pytest.raises(ValidationError) as exc:
            NamerConfigSchema().load({"uid": "uid1", "provider-uid": "UPPER"})
        assert "provider-uid" in exc.value.messages


class TestNamerConfig:
    """Tests for NamerConfig."""

    def test_config_map_data(self):
        config = NamerConfig(uid="uid1", provider_uid=None)
        assert config.as_config_map_data() == {"uid": "uid1"}

    def test_config_map_data_with_provider_uid(self):
        config = NamerConfig(uid="uid1", provider_uid="provider1")
        assert config.as_config_map_data() == {"uid": "uid1", "provider-uid": "provider1"}
