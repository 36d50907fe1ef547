from .cluster import ClusterNamer, NameComponents
from .frontend import FrontendNamer, FrontendResource, NamerProtocol

__all__ = [
    "ClusterNamer",
    "NameComponents",
    "FrontendNamer",
    "FrontendResource",
    "NamerProtocol",
]
