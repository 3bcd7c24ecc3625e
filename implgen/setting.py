"""implgen settings.

Defaults live on ImplementorSettings; an optional implgen.yaml overrides
them, and IMPLGEN_* environment variables (or a .env file) override both.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from .core.constants import DEFAULT_CLASS_SUFFIX

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "implgen.yaml"
ENV_PREFIX = "IMPLGEN_"

# Environment variables holding path lists use the platform separator
_LIST_FIELDS = ("source_roots", "classpath")


class ImplementorSettings(BaseModel):
    class_suffix: str = DEFAULT_CLASS_SUFFIX
    source_roots: List[Path] = Field(default_factory=lambda: [Path(".")])
    classpath: List[str] = Field(default_factory=list)
    source_encoding: str = "utf-8"
    javac: str = "javac"
    javac_timeout: int = 120
    include_jdk_stubs: bool = True
    bundle_contract_classes: bool = False
    log_level: str = "INFO"

    @field_validator("class_suffix")
    @classmethod
    def _suffix_is_identifier_part(cls, value: str) -> str:
        if not value or not all(c.isalnum() or c in "_$" for c in value):
            raise ValueError(f"class_suffix must be a Java identifier fragment, got {value!r}")
        return value

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR"):
            raise ValueError(f"Unknown log level {value!r}")
        return level


def _load_yaml(config_path: Path) -> Dict[str, Any]:
    with open(config_path, "r") as f:
        config = yaml.safe_load(f) or {}
    if not isinstance(config, dict):
        raise ValueError(f"{config_path} must contain a mapping, got {type(config).__name__}")
    # Allow the settings to sit under a top-level "implgen" key
    return config.get("implgen", config)


def _env_overrides() -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    for name in ImplementorSettings.model_fields:
        raw = os.getenv(ENV_PREFIX + name.upper())
        if raw is None:
            continue
        if name in _LIST_FIELDS:
            overrides[name] = [part for part in raw.split(os.pathsep) if part]
        else:
            overrides[name] = raw
    return overrides


def load_settings(config_path: Optional[Union[str, Path]] = None) -> ImplementorSettings:
    """Build settings from defaults, a YAML file and the environment.

    Args:
        config_path: Explicit YAML file. When omitted, implgen.yaml in the
            working directory is used if it exists.

    Raises:
        FileNotFoundError: If an explicit config_path does not exist
        pydantic.ValidationError: If a value has the wrong shape
    """
    load_dotenv()

    values: Dict[str, Any] = {}
    if config_path is not None:
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        values.update(_load_yaml(path))
    elif Path(DEFAULT_CONFIG_FILE).exists():
        values.update(_load_yaml(Path(DEFAULT_CONFIG_FILE)))

    values.update(_env_overrides())
    settings = ImplementorSettings(**values)
    logger.debug(f"Loaded settings: {settings.model_dump()}")
    return settings
