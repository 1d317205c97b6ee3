# src/mef2bids/utils/config.py
from pathlib import Path
from typing import Any, Mapping, Union
from typing import Optional as Opt

import yaml
from schema import And, Optional, Or, Schema, SchemaError

from mef2bids.functions.channels import DEFAULT_REFERENCE, DEFAULT_TYPE
from mef2bids.functions.electrodes import DEFAULT_COORDSYSTEM, FIXED_COORDSYSTEM_FIELDS
from mef2bids.functions.session import DEFAULT_IEEG_SIDECAR, DERIVED_FIELDS
from mef2bids.utils.errors import ConfigError
from mef2bids.utils.logging import message

_VALUE = Or(str, int, float, list, dict, None)

_IEEG_KEYS = [name for name in DEFAULT_IEEG_SIDECAR if name not in DERIVED_FIELDS]
_COORDSYSTEM_KEYS = [
    name for name in DEFAULT_COORDSYSTEM if name not in FIXED_COORDSYSTEM_FIELDS
]

CONFIG_SCHEMA = Schema(
    {
        Optional("ieeg", default={}): Or(
            None, {Optional(name): _VALUE for name in _IEEG_KEYS}
        ),
        Optional("coordsystem", default={}): Or(
            None, {Optional(name): _VALUE for name in _COORDSYSTEM_KEYS}
        ),
        Optional("channels", default={}): Or(
            None,
            {
                Optional("reference_default"): And(str, len),
                Optional("type_default"): And(str, len),
            },
        ),
    }
)


def default_config() -> dict:
    """Return the configuration used when no config file is given."""
    return {
        "ieeg": {},
        "coordsystem": {},
        "channels": {
            "reference_default": DEFAULT_REFERENCE,
            "type_default": DEFAULT_TYPE,
        },
    }


def load_config(config_file: Opt[Union[str, Path]] = None) -> dict:
    """Load and validate a conversion configuration file.

    Parameters
    ----------
    config_file : str or Path, optional
        YAML file with optional ``ieeg``, ``coordsystem`` and ``channels``
        sections. ``None`` returns :func:`default_config`.

    Returns
    -------
    config : dict
        Configuration with every section present; channel defaults not set
        in the file keep their built-in values.

    Raises
    ------
    ConfigError
        If the file cannot be read, is not valid YAML, or names fields that
        do not exist or may not be overridden.

    Examples
    --------
    >>> config = load_config("mef2bids.yaml")
    >>> config["ieeg"]
    {'TaskName': 'rest', 'PowerLineFrequency': 60}
    """
    config = default_config()
    if config_file is None:
        return config

    config_file = Path(config_file)
    message("info", f"Loading config: {config_file}")
    try:
        with open(config_file, encoding="utf-8") as f:
            loaded = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to read config {config_file}: {e}") from e

    return validate_config(loaded, origin=str(config_file))


def validate_config(loaded: Any, origin: str = "config") -> dict:
    """Validate a configuration mapping and merge it over :func:`default_config`.

    Used for config files as well as for configurations passed in directly, so
    partial mappings (e.g. only an ``ieeg`` section) are accepted.

    Raises
    ------
    ConfigError
        If ``loaded`` is not a mapping or does not match :data:`CONFIG_SCHEMA`.
    """
    if not isinstance(loaded, Mapping):
        raise ConfigError(f"Config {origin} must contain a mapping at top level")

    try:
        validated = CONFIG_SCHEMA.validate(dict(loaded))
    except SchemaError as e:
        raise ConfigError(f"Invalid config {origin}: {e}") from e

    config = default_config()
    for section in ("ieeg", "coordsystem", "channels"):
        config[section].update(validated.get(section) or {})

    message(
        "debug",
        f"Config overrides: ieeg={sorted(config['ieeg'])}, "
        f"coordsystem={sorted(config['coordsystem'])}",
    )
    return config
