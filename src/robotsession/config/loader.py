"""Settings files and environment variables.

Both sources are validated by the same pydantic model before anything reaches
the ConfigStore. Values are then applied through the normal setters, so URL
checks still run at assignment time.

Example YAML file:

    wait_time: 5
    app_host: http://localhost:3000
    server: uvicorn
    server_options:
      log_level: error
    reuse_server: false
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Annotated, Any, Dict, Mapping, Optional, Union

import yaml
from pydantic import BaseModel, BeforeValidator, ConfigDict, ValidationError, model_validator

from robotsession.errors import ConfigurationError

logger = logging.getLogger(__name__)

ENV_PREFIX = "ROBOTSESSION_"


def _normalize_name(value: Any) -> Any:
    """Strip and lowercase registry names given as strings."""
    if isinstance(value, str):
        return value.strip().lower()
    return value


RegistryName = Annotated[str, BeforeValidator(_normalize_name)]


class SettingsDocument(BaseModel):
    """Validated view of a settings file or environment."""

    model_config = ConfigDict(extra="forbid")

    wait_time: Optional[Union[int, float]] = None
    app_host: Optional[str] = None
    default_host: Optional[str] = None
    server: Optional[RegistryName] = None
    server_options: Dict[str, Any] = {}
    reuse_server: Optional[bool] = None
    server_host: Optional[str] = None
    server_port: Optional[int] = None
    run_server: Optional[bool] = None
    default_driver: Optional[RegistryName] = None

    @model_validator(mode="after")
    def _options_need_server(self) -> "SettingsDocument":
        if self.server_options and self.server is None:
            raise ValueError("server_options requires server to be set")
        return self

    def to_settings(self) -> Dict[str, Any]:
        """Return only the explicitly given values, keyed by ConfigStore option."""
        values = self.model_dump(exclude_unset=True)
        options = values.pop("server_options", {})
        if "server" in values:
            values["server"] = (values["server"], options)
        return values


def _validate(data: Mapping[str, Any], source: str) -> SettingsDocument:
    try:
        return SettingsDocument.model_validate(dict(data))
    except ValidationError as e:
        raise ConfigurationError(source, f"Invalid settings in {source}: {e}") from e


def load_settings(path: Union[str, Path]) -> Dict[str, Any]:
    """Load and validate a YAML settings file."""
    with open(path, "r") as f:
        data = yaml.safe_load(f)

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            str(path), f"Settings file {path} must contain a mapping at the top level"
        )

    logger.debug(f"Loaded settings from {path}: {sorted(data)}")
    return _validate(data, str(path)).to_settings()


def settings_from_env(environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """Collect ROBOTSESSION_* variables into validated settings.

    Empty variables are ignored.
    """
    environ = os.environ if environ is None else environ
    data: Dict[str, Any] = {}
    for field_name in SettingsDocument.model_fields:
        if field_name == "server_options":
            continue
        raw = environ.get(ENV_PREFIX + field_name.upper(), "").strip()
        if raw:
            data[field_name] = raw
    return _validate(data, "environment").to_settings()
