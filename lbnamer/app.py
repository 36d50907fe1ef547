import kopf
import logging
from marshmallow import ValidationError
from kubernetes_asyncio import config
from kubernetes_asyncio.client import ApiException, CoreV1Api
from kubernetes_asyncio.client.api_client import ApiClient
from lbnamer.handlers import ingress, probes
from lbnamer.namer import ClusterNamer
from lbnamer.resources import ClusterUIDStore
from lbnamer.types.settings import Settings
from lbnamer.utils.errors import convert_api_exception


async def load_cluster_namer(conf: Settings, api_client: ApiClient, logger: logging.Logger) -> ClusterNamer:
    """Build the cluster namer, reading or generating the cluster UID as needed."""
    if conf.cluster_uid:
        logger.info("Using cluster UID from settings")
        return ClusterNamer.from_settings(conf)

    store = ClusterUIDStore(conf.uid_configmap_name, conf.uid_configmap_namespace)
    try:
        namer_config = await store.get_or_create(CoreV1Api(api_client=api_client))
    except ApiException as ex:
        convert_api_exception(ex)
    except ValidationError as ex:
        raise kopf.PermanentError(f"Invalid cluster UID config map: {ex.messages}")

    return ClusterNamer.from_settings(
        conf,
        uid=namer_config.uid,
        firewall_name=conf.firewall_name or namer_config.firewall_name,
    )


@kopf.on.startup()
async def setup(
    settings: kopf.OperatorSettings, memo: kopf.Memo, logger: logging.Logger, **kwargs
):
    # Load Kubernetes config - try in-cluster first (for production), then local kubeconfig (for dev)
    try:
        config.load_incluster_config()
        logger.info("Loaded in-cluster Kubernetes configuration")
    except config.ConfigException:
        logger.info("In-cluster config not found, trying local kubeconfig")
        try:
            await config.load_kube_config()
            logger.info("Loaded local Kubernetes configuration")
        except config.ConfigException as e:
            logger.error(f"Failed to load Kubernetes configuration: {e}")
            raise

    memo.conf = Settings()
    memo.api_client = ApiClient()
    logger.info("Shared Kubernetes API client initialized")

    memo.namer = await load_cluster_namer(memo.conf, memo.api_client, logger)
    logger.info(f"Cluster namer initialized: {memo.namer!r}")

    if not memo.conf.annotate_ingresses:
        logger.warning(
            "Ingress annotations are disabled as per configuration. "
            "Frontend names will not be recorded on ingresses."
        )

    settings.posting.enabled = True
    settings.posting.level = logging.WARNING


@kopf.on.cleanup()
async def cleanup(memo: kopf.Memo, logger: logging.Logger, **kwargs):
    """Cleanup handler for operator shutdown."""
    logger.info("Shutting down operator...")

    api_client = getattr(memo, "api_client", None)
    if api_client is not None:
        await api_client.close()
        logger.info("Shared API client closed")

    logger.info("Operator shutdown complete")


__all__ = [
    "ingress",
    "probes",
]
