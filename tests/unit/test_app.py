"""Unit tests for operator startup helpers."""

import asyncio
import kopf
import pytest
from unittest.mock import AsyncMock, Mock, patch
from kubernetes_asyncio.client import ApiException
from marshmallow import ValidationError
from lbnamer.app import load_cluster_namer
from lbnamer.types.models import NamerConfig
from lbnamer.types.settings import Settings


def _load(conf):
    return asyncio.run(load_cluster_namer(conf, Mock(), Mock()))


class TestLoadClusterNamer:
    def test_uid_from_settings_skips_config_map(self):
        conf = Settings(namer_prefix="mci", cluster_uid="uid1", firewall_name="")
        with patch("lbnamer.app.ClusterUIDStore") as store_cls:
            namer = _load(conf)

        assert namer.uid == "uid1"
        assert namer.prefix == "mci"
        store_cls.assert_not_called()

    def test_uid_from_config_map(self):
        conf = Settings(namer_prefix="k8s", cluster_uid="", firewall_name="")
        with patch("lbnamer.app.ClusterUIDStore") as store_cls:
            store_cls.return_value.get_or_create = AsyncMock(
                return_value=NamerConfig(uid="stored", provider_uid="provider")
            )
            namer = _load(conf)

        assert namer.uid == "stored"
        assert namer.firewall == "provider"
        store_cls.assert_called_once_with(conf.uid_configmap_name, conf.uid_configmap_namespace)

    def test_settings_firewall_name_wins(self):
        conf = Settings(namer_prefix="k8s", cluster_uid="", firewall_name="fw1")
        with patch("lbnamer.app.ClusterUIDStore") as store_cls:
            store_cls.return_value.get_or_create = AsyncMock(
                return_value=NamerConfig(uid="stored", provider_uid="provider")
            )
            namer = _load(conf)

        assert namer.firewall == "fw1"

    def test_invalid_config_map_is_permanent(self):
        conf = Settings(namer_prefix="k8s", cluster_uid="", firewall_name="")
        with patch("lbnamer.app.ClusterUIDStore") as store_cls:
            store_cls.return_value.get_or_create = AsyncMock(
                side_effect=ValidationError({"uid": ["invalid"]})
            )
            with pytest.raises(kopf.PermanentError):
                _load(conf)

    def test_forbidden_config_map_is_permanent(self):
        conf = Settings(namer_prefix="k8s", cluster_uid="", firewall_name="")
        with patch("lbnamer.app.ClusterUIDStore") as store_cls:
            store_cls.return_value.get_or_create = AsyncMock(
                side_effect=ApiException(status=403, reason="Forbidden")
            )
            with pytest.raises(kopf.PermanentError):
                _load(conf)
