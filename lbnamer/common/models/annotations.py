from typing import Dict, Optional


class IngressAnnotations:
    INGRESS_DOMAIN: str = "ingress.kubernetes.io/"

    URL_MAP = INGRESS_DOMAIN + "url-map"

    HTTP_FORWARDING_RULE = INGRESS_DOMAIN + "forwarding-rule"

    HTTPS_FORWARDING_RULE = INGRESS_DOMAIN + "https-forwarding-rule"

    HTTP_TARGET_PROXY = INGRESS_DOMAIN + "target-proxy"

    HTTPS_TARGET_PROXY = INGRESS_DOMAIN + "https-target-proxy"

    SSL_CERT = INGRESS_DOMAIN + "ssl-cert"

    #: Annotations written and removed by this operator.
    OWNED = (
        URL_MAP,
        HTTP_FORWARDING_RULE,
        HTTPS_FORWARDING_RULE,
        HTTP_TARGET_PROXY,
        HTTPS_TARGET_PROXY,
        SSL_CERT,
    )

    INGRESS_CLASS_ANNOTATION = "kubernetes.io/ingress.class"

    _annotations: Dict[str, str]

    def __init__(self, annotations: Dict[str, str] = None) -> None:
        self._annotations = annotations if annotations else dict()

    def as_dict(self) -> Dict[str, str]:
        """Return annotations as dictionary."""
        return self._annotations.copy()

    def include(self, annotation: str, value: str) -> "IngressAnnotations":
        self._annotations[annotation] = value
        return self

    def include_url_map(self, name: str) -> "IngressAnnotations":
        return self.include(self.URL_MAP, name)

    def include_http_forwarding_rule(self, name: str) -> "IngressAnnotations":
        return self.include(self.HTTP_FORWARDING_RULE, name)

    def include_https_forwarding_rule(self, name: str) -> "IngressAnnotations":
        return self.include(self.HTTPS_FORWARDING_RULE, name)

    def include_http_target_proxy(self, name: str) -> "IngressAnnotations":
        return self.include(self.HTTP_TARGET_PROXY, name)

    def include_https_target_proxy(self, name: str) -> "IngressAnnotations":
        return self.include(self.HTTPS_TARGET_PROXY, name)

    def include_ssl_certs(self, names) -> "IngressAnnotations":
        return self.include(self.SSL_CERT, ",".join(names))

    @classmethod
    def ingress_class(cls, annotations: Dict[str, str], spec: Dict = None) -> Optional[str]:
        """Class of an ingress, from the legacy annotation or spec.ingressClassName."""
        value = (annotations or {}).get(cls.INGRESS_CLASS_ANNOTATION)
        if value:
            return value
        return (spec or {}).get("ingressClassName")
