import kopf
from kubernetes_asyncio.client import ApiException, CoreV1Api
from lbnamer.common.models.annotations import IngressAnnotations
from lbnamer.resources import IngressFrontend
from lbnamer.utils.errors import convert_api_exception
from lbnamer.utils.helpers import utc_now

GROUP = "networking.k8s.io"
VERSION = "v1"
PLURAL = "ingresses"

SECRET_NOT_FOUND = "SecretNotFound"
NAMES_ASSIGNED = "FrontendNamesAssigned"


def serves_ingress(annotations, spec, memo: kopf.Memo, **_) -> bool:
    """Only handle ingresses of our class, or ones without any class."""
    if not memo.conf.annotate_ingresses:
        return False
    ingress_class = IngressAnnotations.ingress_class(annotations, spec)
    return ingress_class is None or ingress_class == memo.conf.ingress_class


@kopf.on.resume(GROUP, VERSION, PLURAL, when=serves_ingress)
@kopf.on.create(GROUP, VERSION, PLURAL, when=serves_ingress)
@kopf.on.update(GROUP, VERSION, PLURAL, field="spec.tls", when=serves_ingress)
async def assign_frontend_names(
    body, spec, name, namespace, annotations, patch, memo: kopf.Memo, logger, **kwargs
):
    """Record the frontend resource names of an ingress as annotations."""
    frontend = IngressFrontend.from_spec(name, namespace, spec, memo.namer)

    cert_hashes = None
    if frontend.tls_enabled:
        try:
            cert_hashes = await frontend.fetch_cert_hashes(
                CoreV1Api(api_client=memo.api_client)
            )
        except ApiException as ex:
            convert_api_exception(ex)
        if cert_hashes is None:
            kopf.warn(
                body,
                reason=SECRET_NOT_FOUND,
                message=f"TLS secrets of `{name}` are not all present in `{namespace}` namespace.",
            )

    desired = frontend.prepare_annotations(cert_hashes)
    changed = {k: v for k, v in desired.items() if annotations.get(k) != v}

    # drop names of resources the ingress no longer has; a missing secret
    # keeps the last known cert name
    keep = {IngressAnnotations.SSL_CERT} if frontend.tls_enabled else set()
    for key in IngressAnnotations.OWNED:
        if key in annotations and key not in desired and key not in keep:
            changed[key] = None

    if not changed:
        logger.debug(f"Frontend names of {namespace}/{name} are up to date")
        return

    patch.metadata.annotations.update(changed)
    logger.info(
        f"Assigned load balancer {frontend.namer.lb_name()} to {namespace}/{name} "
        f"at {utc_now().isoformat()}"
    )
    kopf.event(
        body,
        type="Normal",
        reason=NAMES_ASSIGNED,
        message=f"Load balancer `{frontend.namer.lb_name()}` assigned.",
    )
