"""Resolve the effective :class:`~ngapigen.models.GeneratorOptions`.

Options come from four places. :func:`resolve_options` merges them with the
following precedence (highest first):

1. CLI flags (``--no-readonly-models`` ...).
2. Environment variables ``NGAPIGEN_<OPTION>`` (e.g.
   ``NGAPIGEN_READONLY_OUTPUT_MODELS=false``).
3. Additional properties passed as ``-D key=value``.
4. The project config file -- ``--config PATH`` or the first of
   ``ngapigen.json``, ``ngapigen.yaml``, ``ngapigen.yml`` in the working
   directory. Keys may sit at the top level or under ``additionalProperties``.

Option keys are accepted in snake_case (``readonly_output_models``) and under
their camelCase property names (``readonlyModels``). Boolean strings follow
the generator property convention: only ``"true"`` (any case) is true.
Unknown keys are ignored.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional

import yaml

from ngapigen.exceptions import ConfigError, InvalidUsageError
from ngapigen.models import GeneratorOptions

logger = logging.getLogger(__name__)

_ENV_PREFIX = "NGAPIGEN_"
_PROJECT_CONFIG_FILENAMES = ("ngapigen.json", "ngapigen.yaml", "ngapigen.yml")


def _key_map() -> dict[str, str]:
    """Map every accepted spelling of an option to its field name."""
    keys: dict[str, str] = {}
    for field_name, field in GeneratorOptions.model_fields.items():
        keys[field_name] = field_name
        if field.alias:
            keys[field.alias] = field_name
    return keys


def parse_bool(value: Any) -> bool:
    """Interpret *value* as a boolean the way generator properties do.

    Example::

        >>> parse_bool("TRUE"), parse_bool("yes"), parse_bool(False)
        (True, False, False)
    """
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() == "true"


def normalize_options(values: Mapping[str, Any], source: str) -> dict[str, bool]:
    """Return the recognised options in *values*, keyed by field name."""
    keys = _key_map()
    result: dict[str, bool] = {}
    for key, value in values.items():
        field_name = keys.get(key)
        if field_name is None:
            logger.debug("Ignoring unknown option '%s' from %s", key, source)
            continue
        result[field_name] = parse_bool(value)
    return result


def parse_defines(pairs: Iterable[str]) -> dict[str, str]:
    """Parse ``key=value`` strings from ``-D`` flags.

    Raises:
        InvalidUsageError: If an entry has no ``=`` or an empty key.
    """
    result: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise InvalidUsageError(f"Expected key=value, got '{pair}'")
        result[key.strip()] = value.strip()
    return result


def find_project_config(cwd: Optional[Path] = None) -> Optional[Path]:
    """Return the first project config file in *cwd*, if any."""
    base = cwd or Path.cwd()
    for name in _PROJECT_CONFIG_FILENAMES:
        candidate = base / name
        if candidate.is_file():
            return candidate
    return None


def load_config_file(path: Path) -> dict[str, Any]:
    """Read a JSON or YAML config file into a flat option dict.

    Raises:
        ConfigError: If the file cannot be read, parsed, or is not a mapping.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}") from exc

    try:
        if path.suffix.lower() == ".json":
            data = json.loads(text) if text.strip() else {}
        else:
            data = yaml.safe_load(text) or {}
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigError(f"Invalid config file {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")

    nested = data.get("additionalProperties")
    if isinstance(nested, dict):
        data = {**{k: v for k, v in data.items() if k != "additionalProperties"}, **nested}
    return data


def _env_options(environ: Mapping[str, str]) -> dict[str, bool]:
    values = {}
    for field_name in GeneratorOptions.model_fields:
        env_var = _ENV_PREFIX + field_name.upper()
        if env_var in environ:
            values[field_name] = environ[env_var]
    return normalize_options(values, "environment")


def resolve_options(
    cli_overrides: Optional[Mapping[str, Optional[bool]]] = None,
    additional_properties: Optional[Mapping[str, Any]] = None,
    config_file: Optional[str | Path] = None,
    environ: Optional[Mapping[str, str]] = None,
    cwd: Optional[Path] = None,
) -> GeneratorOptions:
    """Merge every option source into one :class:`~ngapigen.models.GeneratorOptions`.

    Args:
        cli_overrides: Option values from CLI flags, keyed by field name.
            ``None`` values mean "not given".
        additional_properties: Raw ``-D`` properties.
        config_file: Explicit config file path. When ``None``, the working
            directory is searched.
        environ: Environment mapping (defaults to ``os.environ``).
        cwd: Directory searched for a project config file.

    Returns:
        The effective options.

    Raises:
        ConfigError: If an explicit *config_file* does not exist or a config
            file is invalid.
    """
    merged: dict[str, bool] = {}

    if config_file is not None:
        path = Path(config_file)
        if not path.is_file():
            raise ConfigError(f"Config file not found: {path}")
    else:
        path = find_project_config(cwd)
    if path is not None:
        logger.debug("Loading options from %s", path)
        merged.update(normalize_options(load_config_file(path), str(path)))

    if additional_properties:
        merged.update(normalize_options(additional_properties, "additional properties"))

    merged.update(_env_options(os.environ if environ is None else environ))

    for key, value in (cli_overrides or {}).items():
        if value is not None:
            merged[key] = value

    return GeneratorOptions(**merged)
