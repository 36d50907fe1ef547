from typing import Optional
from kubernetes_asyncio.client import (
    ApiException,
    CoreV1Api,
    V1ConfigMap,
    V1Secret,
)
from lbnamer.utils.errors import not_found_error


class BaseResource:
    """Base resource model."""

    LBNAMER_OPERATOR_NAME = "lbnamer-operator"

    _namespace: str

    def __init__(self, namespace: str):
        self._namespace = namespace

    @property
    def namespace(self) -> str:
        return self._namespace

    async def fetch_secret(
        self, core_v1_api: CoreV1Api, name: str, namespace: str
    ) -> Optional[V1Secret]:
        try:
            return await core_v1_api.read_namespaced_secret(name=name, namespace=namespace)
        except ApiException as ex:
            if not_found_error(ex):
                return None
            raise

    async def fetch_config_map(
        self, core_v1_api: CoreV1Api, name: str, namespace: str
    ) -> Optional[V1ConfigMap]:
        try:
            return await core_v1_api.read_namespaced_config_map(name=name, namespace=namespace)
        except ApiException as ex:
            if not_found_error(ex):
                return None
            raise

    async def create_config_map(
        self, core_v1_api: CoreV1Api, namespace: str, config_map: V1ConfigMap
    ):
        await core_v1_api.create_namespaced_config_map(
            namespace=namespace, body=config_map
        )

    async def patch_config_map(
        self, core_v1_api: CoreV1Api, name: str, namespace: str, config_map: V1ConfigMap
    ):
        await core_v1_api.patch_namespaced_config_map(
            name=name, namespace=namespace, body=config_map
        )
