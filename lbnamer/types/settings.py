import os
from typing import Any

_TRUE, _FALSE = {"True", "true", "yes", "1"}, {"False", "false", "no", "0"}


def _getenv(name: str, *default: Any) -> Any:
    try:
        v = os.environ[name]
        if v in _TRUE:
            return True
        elif v in _FALSE:
            return False
        else:
            return v
    except KeyError:
        pass
    if default:
        return default[0]
    raise KeyError(name)


def _getenv_str(name: str, default: str) -> str:
    """Read a string setting verbatim, without boolean conversion."""
    return os.environ.get(name, default)


# ------------------------------------------------
# ---- Defaults and environment variables ----
# ------------------------------------------------

#: Leading token of every generated cloud resource name
NAMER_PREFIX = _getenv_str("NAMER_PREFIX", "k8s")

#: Cluster UID; when set, the UID config map is not consulted
CLUSTER_UID = _getenv_str("CLUSTER_UID", "")

#: Overrides the cluster UID in firewall rule names
FIREWALL_NAME = _getenv_str("FIREWALL_NAME", "")

#: Config map holding the cluster UID
UID_CONFIGMAP_NAME = _getenv_str("UID_CONFIGMAP_NAME", "ingress-uid")

#: Namespace of the cluster UID config map
UID_CONFIGMAP_NAMESPACE = _getenv_str("UID_CONFIGMAP_NAMESPACE", "kube-system")

#: Ingress class served by this operator; ingresses without a class are served too
INGRESS_CLASS = _getenv_str("INGRESS_CLASS", "gce")

#: Record generated frontend resource names as ingress annotations
ANNOTATE_INGRESSES = bool(_getenv("ANNOTATE_INGRESSES", True))


class Settings:
    """Operator settings"""

    namer_prefix: str = NAMER_PREFIX
    cluster_uid: str = CLUSTER_UID
    firewall_name: str = FIREWALL_NAME
    uid_configmap_name: str = UID_CONFIGMAP_NAME
    uid_configmap_namespace: str = UID_CONFIGMAP_NAMESPACE
    ingress_class: str = INGRESS_CLASS
    annotate_ingresses: bool = ANNOTATE_INGRESSES

    def __init__(
        self,
        *args,
        namer_prefix: str = None,
        cluster_uid: str = None,
        firewall_name: str = None,
        uid_configmap_name: str = None,
        uid_configmap_namespace: str = None,
        ingress_class: str = None,
        annotate_ingresses: bool = None,
        **kwargs,
    ):
        if namer_prefix is not None:
            self.namer_prefix = namer_prefix

        if cluster_uid is not None:
            self.cluster_uid = cluster_uid

        if firewall_name is not None:
            self.firewall_name = firewall_name

        if uid_configmap_name is not None:
            self.uid_configmap_name = uid_configmap_name

        if uid_configmap_namespace is not None:
            self.uid_configmap_namespace = uid_configmap_namespace

        if ingress_class is not None:
            self.ingress_class = ingress_class

        if annotate_ingresses is not None:
            self.annotate_ingresses = annotate_ingresses
