import logging
import secrets
from kubernetes_asyncio.client import (
    ApiException,
    CoreV1Api,
    V1ConfigMap,
    V1ObjectMeta,
)
from lbnamer.resources.base import BaseResource
from lbnamer.types.models import NamerConfig
from lbnamer.types.schemas import NamerConfigSchema
from lbnamer.utils.errors import already_exists_error

logger = logging.getLogger(__name__)

#: Number of random bytes in a generated cluster UID.
UID_BYTES = 8


def random_uid() -> str:
    return secrets.token_hex(UID_BYTES)


class ClusterUIDStore(BaseResource):
    """Cluster UID persisted in a config map.

    The UID has to survive operator restarts, otherwise every load balancer
    would be renamed. The first replica to start generates a UID and stores
    it; later replicas read it back.
    """

    _name: str

    def __init__(self, name: str, namespace: str):
        super().__init__(namespace)
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def prepare_config_map(self, config: NamerConfig) -> V1ConfigMap:
        return V1ConfigMap(
            api_version="v1",
            kind="ConfigMap",
            metadata=V1ObjectMeta(
                name=self.name,
                namespace=self.namespace,
                labels={"app.kubernetes.io/managed-by": self.LBNAMER_OPERATOR_NAME},
            ),
            data=config.as_config_map_data(),
        )

    async def get_or_create(self, core_v1_api: CoreV1Api) -> NamerConfig:
        """Return the stored namer config, generating and storing a UID if missing."""
        config_map = await self.fetch_config_map(core_v1_api, self.name, self.namespace)
        data = dict(config_map.data or {}) if config_map is not None else {}

        if data.get("uid"):
            config = NamerConfigSchema().load(data)
            logger.info(f"Using cluster UID {config.uid!r} from config map {self.namespace}/{self.name}")
            return config

        data["uid"] = random_uid()
        config = NamerConfigSchema().load(data)

        if config_map is None:
            try:
                await self.create_config_map(
                    core_v1_api, self.namespace, self.prepare_config_map(config)
                )
            except ApiException as ex:
                if not already_exists_error(ex):
                    raise
                # another replica won the race, use its UID
                logger.info(f"Config map {self.namespace}/{self.name} created concurrently, reloading")
                return await self.get_or_create(core_v1_api)
        else:
            await self.patch_config_map(
                core_v1_api, self.name, self.namespace, self.prepare_config_map(config)
            )
        logger.info(f"Stored new cluster UID {config.uid!r} in config map {self.namespace}/{self.name}")
        return config
