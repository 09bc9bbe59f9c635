"""Assembly of ingress resources from a host configuration."""

from typing import Dict, List, Optional, Tuple

from .errors import ServiceNameRequiredError
from .logging_config import get_logger, log_build_event, log_function_entry, log_function_exit
from .models import (
    DEFAULT_SERVICE_PORT,
    TLS_SECRET_SUFFIX,
    Configuration,
    HostEntry,
    IngressResource,
    IngressRule,
    IngressTLS,
    tls_secret_name,
)

logger = get_logger(__name__)

TLS_ACME_ANNOTATION = "kubernetes.io/tls-acme"
SSL_REDIRECT_ANNOTATION = "ingress.kubernetes.io/ssl-redirect"
HSTS_ANNOTATION = "haproxy-ingress.github.io/hsts"
HSTS_INCLUDE_SUBDOMAINS_ANNOTATION = "haproxy-ingress.github.io/hsts-include-subdomains"
HSTS_PRELOAD_ANNOTATION = "haproxy-ingress.github.io/hsts-preload"
HSTS_MAX_AGE_ANNOTATION = "haproxy-ingress.github.io/hsts-max-age"

# two years
HSTS_PRELOAD_MAX_AGE = 63072000


class ManifestBuilder:
    """Builds the TLS-optional and TLS-required ingresses for a configuration.

    Groups are visited in name order and hosts within a group in hostname
    order, so the same configuration always yields the same resources.
    """

    def __init__(self, config: Configuration):
        self.config = config

    def build(self) -> List[IngressResource]:
        """Build every ingress that ends up with at least one rule."""
        log_function_entry(logger, "build", name=self.config.name, namespace=self.config.namespace)

        resources = []
        for resource in (self.build_tls_optional(), self.build_tls_required()):
            if not resource.rules:
                logger.debug("Omitting ingress without rules", ingress_name=resource.name)
                continue
            log_build_event(logger, "resource_emitted",
                            ingress_name=resource.name,
                            rules_count=len(resource.rules),
                            tls_count=len(resource.tls))
            resources.append(resource)

        log_function_exit(logger, "build", resources_count=len(resources))
        return resources

    def build_tls_optional(self) -> IngressResource:
        """Ingress for plain hosts and TLS-optional groups, without HTTPS redirect."""
        resource = self._new_resource(self.config.name, {
            SSL_REDIRECT_ANNOTATION: "false",
            HSTS_ANNOTATION: "false",
        })

        self.add_hosts(resource, self.config.plain)
        self._add_groups(resource, self.config.tls_optional, "tls_optional")
        return self._finish(resource)

    def build_tls_required(self) -> IngressResource:
        """Ingress for TLS-required groups, with HTTPS redirect and HSTS."""
        annotations = {
            SSL_REDIRECT_ANNOTATION: "true",
            HSTS_ANNOTATION: "true",
        }
        if self.config.hsts_preload:
            annotations[HSTS_INCLUDE_SUBDOMAINS_ANNOTATION] = "true"
            annotations[HSTS_PRELOAD_ANNOTATION] = "true"
            annotations[HSTS_MAX_AGE_ANNOTATION] = str(HSTS_PRELOAD_MAX_AGE)

        resource = self._new_resource(self.config.name + TLS_SECRET_SUFFIX, annotations)
        self._add_groups(resource, self.config.tls_required, "tls_required")
        return self._finish(resource)

    def add_hosts(self, resource: IngressResource, hosts: List[HostEntry], tls_name: str = "") -> None:
        """Append one rule per host, and one shared TLS block when ``tls_name`` is set.

        Raises:
            ServiceNameRequiredError: If a host resolves to no service name.
                Nothing is appended to ``resource`` in that case.
        """
        rules = []
        for entry in sorted(hosts, key=lambda h: h.host):
            service_name, service_port = self.resolve_backend(entry, tls_name)
            logger.debug("Adding rule",
                         host=entry.host,
                         service_name=service_name,
                         service_port=service_port,
                         tls_group=tls_name or None)
            rules.append(IngressRule(host=entry.host, service_name=service_name, service_port=service_port))

        resource.rules.extend(rules)
        if tls_name and rules:
            resource.tls.append(IngressTLS(
                secret_name=tls_secret_name(tls_name),
                hosts=[rule.host for rule in rules],
            ))

    def resolve_backend(self, entry: HostEntry, group: Optional[str] = None) -> Tuple[str, int]:
        """Effective service name and port of a host."""
        service_name = entry.service_name or self.config.service_name
        if not service_name:
            raise ServiceNameRequiredError(entry.host, group or None)

        service_port = entry.service_port or self.config.service_port or DEFAULT_SERVICE_PORT
        return service_name, service_port

    def _add_groups(self, resource: IngressResource, groups: Dict[str, List[HostEntry]], kind: str) -> None:
        for group in sorted(groups):
            hosts = groups[group]
            if not hosts:
                # no TLS block at all here, rather than one with an empty host list
                logger.warning("Skipping empty TLS group", group=group, kind=kind)
                continue
            log_build_event(logger, "group_added",
                            group=group,
                            kind=kind,
                            ingress_name=resource.name,
                            hosts_count=len(hosts))
            self.add_hosts(resource, hosts, group)

    def _new_resource(self, name: str, annotations: Dict[str, str]) -> IngressResource:
        common = {TLS_ACME_ANNOTATION: "true"}
        common.update(annotations)
        return IngressResource(
            name=name,
            namespace=self.config.namespace,
            ingress_class=self.config.ingress_class or None,
            annotations=common,
        )

    def _finish(self, resource: IngressResource) -> IngressResource:
        annotations = dict(resource.annotations)
        annotations.update(self.config.annotations)
        resource.annotations = dict(sorted(annotations.items()))
        return resource


def build_ingresses(config: Configuration) -> List[IngressResource]:
    """Build the ingress resources for ``config``."""
    return ManifestBuilder(config).build()
