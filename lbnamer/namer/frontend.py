from enum import Enum
from typing import Dict, Tuple
from lbnamer.namer.cluster import ClusterNamer
from lbnamer.utils.helpers import truncate, sha256_hex

SSL_CERT_PREFIX = "ssl"

#: Number of hex characters of the load balancer name hash used in cert names.
LB_NAME_HASH_LENGTH = 16


class NamerProtocol(str, Enum):
    """Protocol served by a target proxy or forwarding rule."""

    HTTP = "HTTP"
    HTTPS = "HTTPS"


class FrontendResource(str, Enum):
    TARGET_PROXY = "targetProxy"
    FORWARDING_RULE = "forwardingRule"
    URL_MAP = "urlMap"


#: Name infix for every frontend resource, keyed by resource and protocol.
#: The url map is shared by both protocols.
FRONTEND_INFIXES: Dict[Tuple[FrontendResource, NamerProtocol], str] = {
    (FrontendResource.TARGET_PROXY, NamerProtocol.HTTP): "tp",
    (FrontendResource.TARGET_PROXY, NamerProtocol.HTTPS): "tps",
    (FrontendResource.FORWARDING_RULE, NamerProtocol.HTTP): "fw",
    (FrontendResource.FORWARDING_RULE, NamerProtocol.HTTPS): "fws",
    (FrontendResource.URL_MAP, NamerProtocol.HTTP): "um",
    (FrontendResource.URL_MAP, NamerProtocol.HTTPS): "um",
}


class FrontendNamer:
    """Names the frontend resources of a single ingress load balancer.

    Every name is assembled in full from the prefix, the resource infix and
    the load balancer name, then truncated as a whole. Truncating only the
    load balancer name would let names of different resources collide.
    """

    def __init__(self, lb_name: str, namer: ClusterNamer) -> None:
        self._lb_name = lb_name
        self._namer = namer

    @classmethod
    def from_load_balancer_name(cls, lb_name: str, namer: ClusterNamer) -> "FrontendNamer":
        return cls(lb_name, namer)

    @classmethod
    def from_ingress(cls, namespace: str, name: str, namer: ClusterNamer) -> "FrontendNamer":
        return cls(namer.load_balancer(namespace, name), namer)

    def __repr__(self) -> str:
        return f"FrontendNamer(lb_name={self._lb_name!r}, prefix={self._namer.prefix!r})"

    def lb_name(self) -> str:
        return self._lb_name

    def resource_name(self, resource: FrontendResource, protocol: NamerProtocol = NamerProtocol.HTTP) -> str:
        """Name of a frontend resource for protocol."""
        infix = FRONTEND_INFIXES[(FrontendResource(resource), NamerProtocol(protocol))]
        return truncate(f"{self._namer.prefix}-{infix}-{self._lb_name}")

    def target_proxy(self, protocol: NamerProtocol) -> str:
        return self.resource_name(FrontendResource.TARGET_PROXY, protocol)

    def forwarding_rule(self, protocol: NamerProtocol) -> str:
        return self.resource_name(FrontendResource.FORWARDING_RULE, protocol)

    def url_map(self) -> str:
        return self.resource_name(FrontendResource.URL_MAP)

    def _lb_name_hash(self) -> str:
        return sha256_hex(self._lb_name)[:LB_NAME_HASH_LENGTH]

    def ssl_cert_name(self, secret_hash: str) -> str:
        """Name of the SSL certificate for a secret of this load balancer.

        The load balancer name is hashed, so cert names stay short and every
        secret gets its own certificate.
        """
        return self._namer.decorate_name(
            f"{self._namer.prefix}-{SSL_CERT_PREFIX}-{self._lb_name_hash()}-{secret_hash}"
        )

    def is_cert_used_for_lb(self, cert_name: str) -> bool:
        prefix = f"{self._namer.prefix}-{SSL_CERT_PREFIX}-{self._lb_name_hash()}"
        return cert_name.startswith(prefix)

    def is_legacy_ssl_cert(self, cert_name: str) -> bool:
        """Check for certs named before hashing, k8s-ssl-<lb> or k8s-ssl-1-<lb>."""
        primary = truncate(f"{self._namer.prefix}-{SSL_CERT_PREFIX}-{self._lb_name}")
        secondary = truncate(f"{self._namer.prefix}-{SSL_CERT_PREFIX}-1-{self._lb_name}")
        return cert_name.startswith(primary) or cert_name.startswith(secondary)
