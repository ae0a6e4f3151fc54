"""Configuration loading and validation for firmconfig."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any

import yaml
from jsonschema import ValidationError, validators

from firmconfig.core.errors import ConfigLoadError, ConfigValidationError

DEFAULT_SYSFS_ROOT = "/sys/class/firmware-attributes"
SYSFS_ROOT_ENV = "FIRMCONFIG_SYSFS_ROOT"
LOGGER = logging.getLogger(__name__)


class UniqueKeyLoader(yaml.SafeLoader):
    """YAML loader that rejects duplicate mapping keys."""


def _construct_mapping(loader: UniqueKeyLoader, node: yaml.Node, deep: bool = False) -> dict[str, Any]:
    mapping: dict[str, Any] = {}
    for key_node, value_node in node.value:
        key = loader.construct_object(key_node, deep=deep)
        if key in mapping:
            raise ConfigValidationError(f"Duplicate key '{key}' in YAML document")
        mapping[key] = loader.construct_object(value_node, deep=deep)
    return mapping


UniqueKeyLoader.add_constructor(
    yaml.resolver.BaseResolver.DEFAULT_MAPPING_TAG,
    _construct_mapping,
)


@dataclass(frozen=True)
class Config:
    sysfs_root: str = DEFAULT_SYSFS_ROOT
    best_effort: bool = False
    log_level: str = "WARNING"
    source: Path | None = None


def _load_schema_validator() -> Any:
    schema_text = resources.files("firmconfig.schemas").joinpath("config.schema.json").read_text(
        encoding="utf-8"
    )
    schema = json.loads(schema_text)
    validator_cls = validators.validator_for(schema)
    validator_cls.check_schema(schema)
    return validator_cls(schema)


def config_path() -> Path:
    xdg_config = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    return xdg_config / "firmconfig/config.yaml"


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigLoadError(f"Could not read config file {path}: {exc}") from exc

    try:
        loaded = yaml.load(content, Loader=UniqueKeyLoader)
    except yaml.YAMLError as exc:
        raise ConfigValidationError(f"Invalid YAML in {path}: {exc}") from exc

    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigValidationError(f"Config file {path} must contain a mapping at root")
    return loaded


def load_config(path: Path | None = None) -> Config:
    """Load the optional YAML config, then apply environment overrides."""
    path = path or config_path()
    doc: dict[str, Any] = {}
    source: Path | None = None
    if path.is_file():
        doc = _read_yaml(path)
        try:
            _load_schema_validator().validate(doc)
        except ValidationError as exc:
            where = ".".join(str(p) for p in exc.path)
            where = f" ({where})" if where else ""
            raise ConfigValidationError(f"Schema validation failed for {path}{where}: {exc.message}") from exc
        source = path
        LOGGER.debug("Loaded configuration from %s", path)

    sysfs_root = os.environ.get(SYSFS_ROOT_ENV) or doc.get("sysfs_root", DEFAULT_SYSFS_ROOT)
    return Config(
        sysfs_root=sysfs_root,
        best_effort=doc.get("best_effort", False),
        log_level=doc.get("log_level", "WARNING"),
        source=source,
    )
