import logging
from typing import Optional
from lbnamer.utils.helpers import truncate, trim_fields_evenly, sha256_hex

logger = logging.getLogger(__name__)

DEFAULT_PREFIX = "k8s"

#: Separates the cluster UID from the rest of a resource name.
CLUSTER_NAME_DELIMITER = "--"

BACKEND_PREFIX = "be"
INSTANCE_GROUP_PREFIX = "ig"
FIREWALL_RULE_PREFIX = "fw"
FIREWALL_L7_SUFFIX = "l7"

#: Schema version stamped on NEG names.
NEG_SCHEMA_VERSION = "1"

#: Length budget for the namespace, name and port part of a NEG name.
MAX_NEG_DESCRIPTIVE_LABEL = 36

SHORT_UID_LENGTH = 8
NEG_HASH_LENGTH = 8


class NameComponents:
    """Components recovered from a generated resource name."""

    cluster_name: str
    resource: str

    def __init__(self, cluster_name: str = "", resource: str = "") -> None:
        self.cluster_name = cluster_name
        self.resource = resource

    def __eq__(self, other) -> bool:
        if not isinstance(other, NameComponents):
            return NotImplemented
        return (self.cluster_name, self.resource) == (
            other.cluster_name,
            other.resource,
        )

    def __repr__(self) -> str:
        return f"NameComponents(cluster_name={self.cluster_name!r}, resource={self.resource!r})"


def _last_token(value: str, what: str) -> str:
    """Keep only the last '--' separated token of a cluster UID or firewall name."""
    if CLUSTER_NAME_DELIMITER in value:
        tokens = value.split(CLUSTER_NAME_DELIMITER)
        logger.warning(
            f"{what} {value!r} contains {CLUSTER_NAME_DELIMITER!r}, "
            f"taking last token in: {tokens}"
        )
        return tokens[-1]
    return value


class ClusterNamer:
    """Cluster wide naming configuration.

    Holds the resource name prefix, the cluster UID and an optional firewall
    name override. Instances are immutable; build one at startup and share it
    between every frontend namer.
    """

    __slots__ = ("_prefix", "_uid", "_firewall_name")

    def __init__(
        self,
        uid: str = "",
        firewall_name: str = "",
        prefix: str = DEFAULT_PREFIX,
    ) -> None:
        object.__setattr__(self, "_prefix", prefix)
        object.__setattr__(self, "_uid", _last_token(uid or "", "Cluster UID"))
        object.__setattr__(
            self,
            "_firewall_name",
            _last_token(firewall_name or "", "Firewall name"),
        )

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __repr__(self) -> str:
        return (
            f"ClusterNamer(prefix={self._prefix!r}, uid={self._uid!r}, "
            f"firewall_name={self._firewall_name!r})"
        )

    @property
    def prefix(self) -> str:
        return self._prefix

    @property
    def uid(self) -> str:
        return self._uid

    @property
    def firewall(self) -> str:
        """Firewall name override, falling back to the cluster UID."""
        return self._firewall_name or self._uid

    @property
    def short_uid(self) -> str:
        return self._uid[:SHORT_UID_LENGTH]

    def decorate_name(self, name: str) -> str:
        """Append the cluster UID to name and truncate it.

        Legacy clusters have no UID, in which case name is returned as is.
        """
        if not self._uid:
            return name
        return truncate(f"{name}{CLUSTER_NAME_DELIMITER}{self._uid}")

    def load_balancer_from_key(self, key: str) -> str:
        """Fold an ingress key of the form namespace/name into a load balancer name."""
        scrubbed = key.replace("/", "-")
        last = key.split(CLUSTER_NAME_DELIMITER)[-1]
        if not self._uid or last == self._uid:
            return truncate(scrubbed)
        return truncate(f"{scrubbed}{CLUSTER_NAME_DELIMITER}{self._uid}")

    def load_balancer(self, namespace: str, name: str) -> str:
        """Return the load balancer name for the ingress namespace/name."""
        return self.load_balancer_from_key(f"{namespace}/{name}")

    def ig_backend(self, port: int) -> str:
        """Name of the backend service for an instance group node port."""
        return self.decorate_name(f"{self._prefix}-{BACKEND_PREFIX}-{port}")

    def instance_group(self) -> str:
        return self.decorate_name(f"{self._prefix}-{INSTANCE_GROUP_PREFIX}")

    def firewall_rule(self) -> str:
        """Name of the L7 firewall rule shared by every ingress in the cluster."""
        return (
            f"{self._prefix}-{FIREWALL_RULE_PREFIX}-{FIREWALL_L7_SUFFIX}"
            f"{CLUSTER_NAME_DELIMITER}{self.firewall}"
        )

    def neg(self, namespace: str, name: str, port: int) -> str:
        """Name of the network endpoint group for a service port.

        Namespace, name and port are trimmed in proportion to their length and
        a short hash of the untrimmed values keeps trimmed names unique.
        """
        port_str = str(port)
        trunc_namespace, trunc_name, trunc_port = trim_fields_evenly(
            MAX_NEG_DESCRIPTIVE_LABEL, namespace, name, port_str
        )
        return "-".join(
            [
                f"{self._prefix}{NEG_SCHEMA_VERSION}",
                self.short_uid,
                trunc_namespace,
                trunc_name,
                trunc_port,
                self._neg_suffix(namespace, name, port_str),
            ]
        )

    def _neg_suffix(self, namespace: str, name: str, port: str) -> str:
        neg_string = ";".join([self.short_uid, namespace, name, port])
        return sha256_hex(neg_string)[:NEG_HASH_LENGTH]

    def name_belongs_to_cluster(self, name: str) -> bool:
        """Check whether name was generated by this namer for this cluster."""
        if not name.startswith(f"{self._prefix}-"):
            return False
        components = name.split(CLUSTER_NAME_DELIMITER)
        if len(components) == 1:
            return False
        if len(components) > 2:
            logger.error(f"Too many components in name {name}: {components}")
            return False
        return components[1] == self._uid

    def parse_name(self, name: str) -> NameComponents:
        """Parse cluster UID and resource type out of a generated name.

        Only meaningful for decorated names such as backends, instance
        groups and url maps.
        """
        cluster_name = ""
        parts = name.split(CLUSTER_NAME_DELIMITER)
        if len(parts) >= 2:
            cluster_name = parts[-1]
        resource = ""
        tokens = name.split("-")
        if len(tokens) >= 2:
            resource = tokens[1]
        return NameComponents(cluster_name=cluster_name, resource=resource)

    @classmethod
    def from_settings(cls, settings, uid: Optional[str] = None, firewall_name: Optional[str] = None) -> "ClusterNamer":
        """Build a namer from operator settings.

        Explicit uid/firewall_name values, such as ones read from the cluster
        UID config map, take precedence over settings.
        """
        return cls(
            uid=uid if uid is not None else settings.cluster_uid,
            firewall_name=(
                firewall_name if firewall_name is not None else settings.firewall_name
            ),
            prefix=settings.namer_prefix,
        )
