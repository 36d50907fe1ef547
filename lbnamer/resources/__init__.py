from .ingress import IngressFrontend
from .uid import ClusterUIDStore

__all__ = ["IngressFrontend", "ClusterUIDStore"]
