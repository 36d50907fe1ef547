from . import ingress, probes

__all__ = ["ingress", "probes"]
