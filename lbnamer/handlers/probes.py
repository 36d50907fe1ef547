import kopf
from lbnamer.utils.helpers import utc_now


# Liveness probe
@kopf.on.probe(id="now")
def get_current_timestamp(**kwargs):
    return utc_now().isoformat()


@kopf.on.probe(id="clusterUid")
def get_cluster_uid(memo: kopf.Memo, **kwargs):
    """Report the cluster UID the namer was built with."""
    namer = getattr(memo, "namer", None)
    return namer.uid if namer is not None else None
