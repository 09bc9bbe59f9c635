"""ingressgen: Kubernetes Ingress manifests from a declarative host/service mapping."""

__version__ = "0.1.0"

# Lazy imports to avoid loading heavy dependencies for CLI usage
__all__ = [
    "Configuration",
    "HostEntry",
    "IngressResource",
    "ManifestBuilder",
    "build_ingresses",
    "load_config",
    "render_list",
]


def __getattr__(name):
    if name in ("Configuration", "HostEntry", "IngressResource"):
        from . import models
        return getattr(models, name)
    elif name in ("ManifestBuilder", "build_ingresses"):
        from . import builder
        return getattr(builder, name)
    elif name == "load_config":
        from .config import load_config
        return load_config
    elif name == "render_list":
        from .render import render_list
        return render_list
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
