"""Data models for ingressgen configuration and generated ingresses."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

DEFAULT_SERVICE_PORT = 80
TLS_SECRET_SUFFIX = "-tls"


def tls_secret_name(group: str) -> str:
    """Name of the TLS secret shared by all hosts of a group."""
    return f"{group}{TLS_SECRET_SUFFIX}"


class HostEntry(BaseModel):
    """A single host routed to a service.

    Accepts either a bare hostname string or an object with ``host``,
    ``service-name`` and ``service-port`` keys.
    """

    host: str = Field(..., min_length=1, description="External hostname")
    service_name: Optional[str] = Field(None, alias="service-name", description="Backend service override")
    service_port: Optional[int] = Field(None, alias="service-port", ge=0, le=65535, description="Backend port override, 0 means unset")

    @model_validator(mode="before")
    @classmethod
    def _from_bare_hostname(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"host": data}
        if isinstance(data, (dict, HostEntry)):
            return data
        raise ValueError(f"unknown type for host entry: {type(data).__name__}")


HostGroup = List[HostEntry]


class Configuration(BaseModel):
    """The user supplied host mapping."""

    name: str = Field("", description="Base name of the generated ingresses")
    namespace: str = Field("", description="Namespace of the generated ingresses")
    ingress_class: str = Field("", alias="ingress-class", description="Ingress class name")
    annotations: Dict[str, str] = Field(default_factory=dict, description="Annotations merged over the computed ones")
    service_name: str = Field("", alias="service-name", description="Default backend service")
    service_port: int = Field(DEFAULT_SERVICE_PORT, alias="service-port", ge=0, le=65535, description="Default backend port")
    plain: List[HostEntry] = Field(default_factory=list, description="Hosts served without TLS")
    tls_optional: Dict[str, HostGroup] = Field(default_factory=dict, alias="tls-optional", description="TLS groups without HTTPS redirect")
    tls_required: Dict[str, HostGroup] = Field(default_factory=dict, alias="tls-required", description="TLS groups with HTTPS redirect")
    hsts_preload: bool = Field(False, alias="hsts-preload", description="Add HSTS preload annotations")

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        # JSON null falls back to the field default
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data

    @field_validator("service_port")
    @classmethod
    def _default_service_port(cls, value: int) -> int:
        return value or DEFAULT_SERVICE_PORT


class IngressRule(BaseModel):
    """A host routed to a single backend on path ``/``."""

    host: str
    service_name: str
    service_port: int
    path: str = "/"
    path_type: str = "Prefix"


class IngressTLS(BaseModel):
    """A TLS block: one secret covering a set of hosts."""

    secret_name: str
    hosts: List[str] = Field(default_factory=list)


class IngressResource(BaseModel):
    """A generated ingress, independent of the Kubernetes schema version."""

    name: str
    namespace: str = ""
    ingress_class: Optional[str] = None
    annotations: Dict[str, str] = Field(default_factory=dict)
    rules: List[IngressRule] = Field(default_factory=list)
    tls: List[IngressTLS] = Field(default_factory=list)
