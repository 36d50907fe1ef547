import base64
import logging
from typing import Dict, List, Mapping, Optional
from kubernetes_asyncio.client import CoreV1Api, V1Secret
from lbnamer.common.models.annotations import IngressAnnotations
from lbnamer.namer import ClusterNamer, FrontendNamer, NamerProtocol
from lbnamer.resources.base import BaseResource
from lbnamer.utils.helpers import cert_hash

logger = logging.getLogger(__name__)

TLS_CERT_KEY = "tls.crt"
TLS_PRIVATE_KEY_KEY = "tls.key"


class IngressFrontend(BaseResource):
    """Frontend resource names of a single ingress."""

    _name: str
    _tls_secrets: List[str]
    _namer: FrontendNamer

    def __init__(
        self,
        name: str,
        namespace: str,
        cluster_namer: ClusterNamer,
        tls_secrets: List[str] = None,
    ):
        super().__init__(namespace)
        self._name = name
        self._tls_secrets = list(tls_secrets or [])
        self._namer = FrontendNamer.from_ingress(namespace, name, cluster_namer)

    @classmethod
    def from_spec(
        cls, name: str, namespace: str, spec: Mapping, cluster_namer: ClusterNamer
    ) -> "IngressFrontend":
        tls = (spec or {}).get("tls") or []
        secrets = [t["secretName"] for t in tls if t.get("secretName")]
        return cls(name, namespace, cluster_namer, tls_secrets=secrets)

    @property
    def name(self) -> str:
        return self._name

    @property
    def namer(self) -> FrontendNamer:
        return self._namer

    @property
    def tls_secrets(self) -> List[str]:
        return list(self._tls_secrets)

    @property
    def tls_enabled(self) -> bool:
        return bool(self._tls_secrets)

    def prepare_annotations(self, cert_hashes: Optional[List[str]] = None) -> Dict[str, str]:
        """Annotations recording the names of the ingress frontend resources."""
        annotations = (
            IngressAnnotations()
            .include_url_map(self.namer.url_map())
            .include_http_forwarding_rule(self.namer.forwarding_rule(NamerProtocol.HTTP))
            .include_http_target_proxy(self.namer.target_proxy(NamerProtocol.HTTP))
        )
        if self.tls_enabled:
            annotations.include_https_forwarding_rule(
                self.namer.forwarding_rule(NamerProtocol.HTTPS)
            ).include_https_target_proxy(self.namer.target_proxy(NamerProtocol.HTTPS))
        if cert_hashes:
            annotations.include_ssl_certs(
                [self.namer.ssl_cert_name(h) for h in cert_hashes]
            )
        return annotations.as_dict()

    @staticmethod
    def secret_hash(secret: V1Secret) -> str:
        """Hash of the certificate and private key held in a TLS secret."""
        data = secret.data or {}
        cert = base64.b64decode(data.get(TLS_CERT_KEY, ""))
        key = base64.b64decode(data.get(TLS_PRIVATE_KEY_KEY, ""))
        return cert_hash(cert, key)

    async def fetch_cert_hashes(self, core_v1_api: CoreV1Api) -> Optional[List[str]]:
        """Hash every TLS secret of the ingress.

        Returns None if any of the secrets does not exist yet.
        """
        hashes = []
        for secret_name in self._tls_secrets:
            secret = await self.fetch_secret(core_v1_api, secret_name, self.namespace)
            if secret is None:
                logger.warning(f"TLS secret {self.namespace}/{secret_name} not found")
                return None
            hashes.append(self.secret_hash(secret))
        return hashes
