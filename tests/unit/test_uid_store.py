"""Unit tests for the cluster UID store."""

import asyncio
import pytest
from unittest.mock import AsyncMock, Mock, patch
from kubernetes_asyncio.client import ApiException, V1ConfigMap
from marshmallow import ValidationError
from lbnamer.resources import ClusterUIDStore


@pytest.fixture
def store():
    return ClusterUIDStore("ingress-uid", "kube-system")


@pytest.fixture
def core_v1_api():
    api = Mock()
    api.read_namespaced_config_map = AsyncMock()
    api.create_namespaced_config_map = AsyncMock()
    api.patch_namespaced_config_map = AsyncMock()
    return api


class TestClusterUIDStore:
    """Tests for ClusterUIDStore.get_or_create()."""

    def test_existing_uid(self, store, core_v1_api):
        core_v1_api.read_namespaced_config_map.return_value = V1ConfigMap(
            data={"uid": "a1b2c3", "provider-uid": "p1"}
        )

        config = asyncio.run(store.get_or_create(core_v1_api))

        assert config.uid == "a1b2c3"
        assert config.firewall_name == "p1"
        core_v1_api.create_namespaced_config_map.assert_not_awaited()
        core_v1_api.patch_namespaced_config_map.assert_not_awaited()

    def test_missing_config_map_creates_uid(self, store, core_v1_api):
        core_v1_api.read_namespaced_config_map.side_effect = ApiException(status=404, reason="Not Found")

        with patch("lbnamer.resources.uid.random_uid", return_value="0011223344556677"):
            config = asyncio.run(store.get_or_create(core_v1_api))

        assert config.uid == "0011223344556677"
        core_v1_api.create_namespaced_config_map.assert_awaited_once()
        body = core_v1_api.create_namespaced_config_map.call_args.kwargs["body"]
        assert body.metadata.name == "ingress-uid"
        assert body.metadata.namespace == "kube-system"
        assert body.data == {"uid": "0011223344556677"}

    def test_config_map_without_uid_is_patched(self, store, core_v1_api):
        core_v1_api.read_namespaced_config_map.return_value = V1ConfigMap(data={})

        with patch("lbnamer.resources.uid.random_uid", return_value="0011223344556677"):
            config = asyncio.run(store.get_or_create(core_v1_api))

        assert config.uid == "0011223344556677"
        core_v1_api.patch_namespaced_config_map.assert_awaited_once()
        core_v1_api.create_namespaced_config_map.assert_not_awaited()

    def test_concurrent_create_reloads(self, store, core_v1_api):
        core_v1_api.read_namespaced_config_map.side_effect = [
            ApiException(status=404, reason="Not Found"),
            V1ConfigMap(data={"uid": "winner"}),
        ]
        core_v1_api.create_namespaced_config_map.side_effect = ApiException(
            status=409, reason="Conflict"
        )

        config = asyncio.run(store.get_or_create(core_v1_api))

        assert config.uid == "winner"

    def test_invalid_stored_uid(self, store, core_v1_api):
        core_v1_api.read_namespaced_config_map.return_value = V1ConfigMap(data={"uid": "Bad_UID"})
        with pytest.raises(ValidationError):
            asyncio.run(store.get_or_create(core_v1_api))

    def test_random_uid_is_hex(self):
        from lbnamer.resources.uid import random_uid

        uid = random_uid()
        assert len(uid) == 16
        int(uid, 16)
