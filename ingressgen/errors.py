"""Error types raised while generating ingress manifests."""

from typing import Optional


class IngressgenError(Exception):
    """Base class for all fatal ingressgen errors."""


class ConfigError(IngressgenError):
    """The input configuration could not be loaded."""

    def __init__(self, message: str, path: Optional[str] = None):
        self.path = path
        super().__init__(message)


class ConfigReadError(ConfigError):
    """The input file could not be read."""


class ConfigDecodeError(ConfigError):
    """The input file is not valid JSON or does not match the configuration schema."""


class ServiceNameRequiredError(IngressgenError):
    """A host resolved to no service name."""

    def __init__(self, host: str, group: Optional[str] = None):
        self.host = host
        self.group = group
        where = f"group '{group}'" if group else "plain hosts"
        super().__init__(f"service-name required for host '{host}' in {where}")
