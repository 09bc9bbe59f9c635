"""Rendering of ingress resources as Kubernetes manifests."""

import json
from typing import Any, Dict, List

import yaml
from kubernetes import client

from .models import IngressResource

NETWORKING_V1 = "networking.k8s.io/v1"
EXTENSIONS_V1BETA1 = "extensions/v1beta1"
API_VERSIONS = (NETWORKING_V1, EXTENSIONS_V1BETA1)

OUTPUT_FORMATS = ("json", "yaml")

INGRESS_CLASS_ANNOTATION = "kubernetes.io/ingress.class"

_api_client = None


def _sanitize(obj: Any) -> Any:
    global _api_client
    if _api_client is None:
        _api_client = client.ApiClient()
    return _api_client.sanitize_for_serialization(obj)


def _networking_v1_ingress(resource: IngressResource) -> Dict[str, Any]:
    rules = [
        client.V1IngressRule(
            host=rule.host,
            http=client.V1HTTPIngressRuleValue(paths=[
                client.V1HTTPIngressPath(
                    path=rule.path,
                    path_type=rule.path_type,
                    backend=client.V1IngressBackend(
                        service=client.V1IngressServiceBackend(
                            name=rule.service_name,
                            port=client.V1ServiceBackendPort(number=rule.service_port),
                        ),
                    ),
                ),
            ]),
        )
        for rule in resource.rules
    ]
    tls = [client.V1IngressTLS(secret_name=t.secret_name, hosts=list(t.hosts)) for t in resource.tls]

    ingress = client.V1Ingress(
        api_version=NETWORKING_V1,
        kind="Ingress",
        metadata=client.V1ObjectMeta(
            name=resource.name,
            namespace=resource.namespace or None,
            annotations=dict(resource.annotations) or None,
        ),
        spec=client.V1IngressSpec(
            ingress_class_name=resource.ingress_class,
            rules=rules,
            tls=tls or None,
        ),
    )
    return _sanitize(ingress)


def _extensions_v1beta1_ingress(resource: IngressResource) -> Dict[str, Any]:
    # the class is an annotation here, user annotations still win
    annotations = {}
    if resource.ingress_class:
        annotations[INGRESS_CLASS_ANNOTATION] = resource.ingress_class
    annotations.update(resource.annotations)

    metadata: Dict[str, Any] = {"name": resource.name}
    if resource.namespace:
        metadata["namespace"] = resource.namespace
    if annotations:
        metadata["annotations"] = dict(sorted(annotations.items()))

    spec: Dict[str, Any] = {
        "rules": [
            {
                "host": rule.host,
                "http": {
                    "paths": [
                        {
                            "path": rule.path,
                            "backend": {
                                "serviceName": rule.service_name,
                                "servicePort": rule.service_port,
                            },
                        }
                    ],
                },
            }
            for rule in resource.rules
        ],
    }
    if resource.tls:
        spec["tls"] = [{"hosts": list(t.hosts), "secretName": t.secret_name} for t in resource.tls]

    return {
        "apiVersion": EXTENSIONS_V1BETA1,
        "kind": "Ingress",
        "metadata": metadata,
        "spec": spec,
    }


def render_ingress(resource: IngressResource, api_version: str = NETWORKING_V1) -> Dict[str, Any]:
    """Render one resource as an Ingress manifest of the given API version."""
    if api_version == NETWORKING_V1:
        return _networking_v1_ingress(resource)
    if api_version == EXTENSIONS_V1BETA1:
        return _extensions_v1beta1_ingress(resource)
    raise ValueError(f"unsupported ingress api version: {api_version}")


def render_list(resources: List[IngressResource], api_version: str = NETWORKING_V1) -> Dict[str, Any]:
    """Wrap the rendered ingresses in a ``v1`` ``List``."""
    return {
        "apiVersion": "v1",
        "kind": "List",
        "items": [render_ingress(resource, api_version) for resource in resources],
    }


def dump(document: Dict[str, Any], output_format: str = "json") -> str:
    """Serialize a manifest document as two-space indented JSON or as YAML."""
    if output_format == "json":
        return json.dumps(document, indent=2) + "\n"
    if output_format == "yaml":
        return yaml.safe_dump(document, default_flow_style=False, sort_keys=False)
    raise ValueError(f"unsupported output format: {output_format}")
