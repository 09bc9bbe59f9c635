"""Loading and defaulting of the ingress host configuration."""

import json
from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError

from .errors import ConfigDecodeError, ConfigReadError
from .logging_config import get_logger, log_function_entry, log_function_exit
from .models import Configuration

logger = get_logger(__name__)

DEFAULT_CONFIG_FILE = "ingress-hosts.json"


def _format_validation_error(error: ValidationError) -> str:
    parts = []
    for detail in error.errors():
        location = ".".join(str(part) for part in detail["loc"]) or "<root>"
        parts.append(f"{location}: {detail['msg']}")
    return "; ".join(parts)


def load_config(path: Union[str, Path] = DEFAULT_CONFIG_FILE) -> Configuration:
    """Read and validate a configuration file.

    Args:
        path: Path to the JSON configuration file

    Returns:
        The validated configuration

    Raises:
        ConfigReadError: If the file cannot be read
        ConfigDecodeError: If the file is not valid JSON or does not match the schema
    """
    config_path = Path(path)
    log_function_entry(logger, "load_config", config_path=str(config_path))

    try:
        with open(config_path, encoding="utf-8") as f:
            raw = f.read()
    except OSError as e:
        raise ConfigReadError(f"could not read config {config_path}: {e}", path=str(config_path)) from e
    except UnicodeDecodeError as e:
        raise ConfigDecodeError(f"could not decode config {config_path}: {e}", path=str(config_path)) from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigDecodeError(f"could not decode config {config_path}: {e}", path=str(config_path)) from e

    try:
        config = Configuration.model_validate(data)
    except ValidationError as e:
        raise ConfigDecodeError(
            f"invalid config {config_path}: {_format_validation_error(e)}", path=str(config_path)
        ) from e

    logger.info("Configuration loaded",
                config_path=str(config_path),
                plain_hosts=len(config.plain),
                tls_optional_groups=len(config.tls_optional),
                tls_required_groups=len(config.tls_required))
    log_function_exit(logger, "load_config", status="success")
    return config


def apply_overrides(
    config: Configuration,
    name: Optional[str] = None,
    namespace: Optional[str] = None,
    ingress_class: Optional[str] = None,
) -> Configuration:
    """Return a copy of ``config`` with the non-empty overrides applied."""
    overrides = {
        "name": name,
        "namespace": namespace,
        "ingress_class": ingress_class,
    }
    update = {field: value for field, value in overrides.items() if value}
    if update:
        logger.debug("Applying configuration overrides", **update)
    return config.model_copy(update=update)
