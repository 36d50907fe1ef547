"""Unit tests for operator settings."""

import pytest
from lbnamer.types.settings import Settings, _getenv, _getenv_str


class TestGetenv:
    """Tests for _getenv()."""

    def test_default(self, monkeypatch):
        monkeypatch.delenv("LBNAMER_TEST_VAR", raising=False)
        assert _getenv("LBNAMER_TEST_VAR", "fallback") == "fallback"

    def test_missing_without_default(self, monkeypatch):
        monkeypatch.delenv("LBNAMER_TEST_VAR", raising=False)
        with pytest.raises(KeyError):
            _getenv("LBNAMER_TEST_VAR")

    def test_string_value(self, monkeypatch):
        monkeypatch.setenv("LBNAMER_TEST_VAR", "mci")
        assert _getenv("LBNAMER_TEST_VAR", "k8s") == "mci"

    @pytest.mark.parametrize("value,expected", [("true", True), ("yes", True), ("false", False), ("0", False)])
    def test_boolean_values(self, monkeypatch, value, expected):
        monkeypatch.setenv("LBNAMER_TEST_VAR", value)
        assert _getenv("LBNAMER_TEST_VAR", None) is expected


class TestGetenvStr:
    """Tests for _getenv_str()."""

    @pytest.mark.parametrize("value", ["1", "0", "true", "no", "uid1"])
    def test_value_kept_verbatim(self, monkeypatch, value):
        monkeypatch.setenv("LBNAMER_TEST_VAR", value)
        assert _getenv_str("LBNAMER_TEST_VAR", "") == value

    def test_default(self, monkeypatch):
        monkeypatch.delenv("LBNAMER_TEST_VAR", raising=False)
        assert _getenv_str("LBNAMER_TEST_VAR", "k8s") == "k8s"


class TestSettings:
    """Tests for Settings."""

    def test_overrides(self):
        settings = Settings(
            namer_prefix="mci",
            cluster_uid="uid1",
            firewall_name="fw1",
            ingress_class="gce-internal",
            annotate_ingresses=False,
        )
        assert settings.namer_prefix == "mci"
        assert settings.cluster_uid == "uid1"
        assert settings.firewall_name == "fw1"
        assert settings.ingress_class == "gce-internal"
        assert settings.annotate_ingresses is False

    def test_unset_values_keep_class_defaults(self):
        settings = Settings(namer_prefix="mci")
        assert settings.uid_configmap_name == Settings.uid_configmap_name
        assert settings.uid_configmap_namespace == Settings.uid_configmap_namespace
