"""Configuration loading with precedence resolution and credential sources.

This module handles all configuration for restclient:

* **Config files** -- A :class:`~restclient.models.ClientConfig` stored as
  JSON or YAML. See :func:`load_config`.
* **Precedence resolution** -- :func:`resolve_config` merges explicit
  arguments, environment variables, and the config file into the final
  effective configuration.
* **Credential resolution** -- :func:`resolve_credential` reads secrets
  from env vars, files, or interactive prompts.
"""

from __future__ import annotations

import getpass
import json
import os
import sys
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from restclient.exceptions import ConfigError
from restclient.models import ClientConfig

ENV_CONFIG = "RESTCLIENT_CONFIG"
ENV_BASE_URL = "RESTCLIENT_BASE_URL"
ENV_TIMEOUT = "RESTCLIENT_TIMEOUT"
ENV_VERIFY_SSL = "RESTCLIENT_VERIFY_SSL"

_YAML_SUFFIXES = (".yaml", ".yml")
_FALSE_VALUES = ("0", "false", "no", "off")


# --- Config files ---


def _parse_content(content: str, hint: str) -> dict[str, Any]:
    """Parse *content* as JSON or YAML, trying the format *hint* suggests first."""
    if hint.endswith(_YAML_SUFFIXES):
        parsers = (yaml.safe_load, json.loads)
    else:
        parsers = (json.loads, yaml.safe_load)

    last_error: Exception | None = None
    for parse in parsers:
        try:
            data = parse(content)
        except (json.JSONDecodeError, yaml.YAMLError) as exc:
            last_error = exc
            continue
        if not isinstance(data, dict):
            raise ConfigError(
                f"Config at {hint} must be a mapping, got {type(data).__name__}"
            )
        return data

    raise ConfigError(f"Cannot parse config at {hint}: {last_error}")


def load_config(path: str | Path) -> ClientConfig:
    """Load and validate a client configuration file.

    JSON and YAML are both accepted. The format is picked from the file
    extension, falling back to the other parser if the first one fails.

    Args:
        path: Path to the config file.

    Returns:
        The deserialised :class:`~restclient.models.ClientConfig`.

    Raises:
        ConfigError: If the file does not exist, cannot be parsed, or fails
            Pydantic validation.
    """
    path = Path(path).expanduser()
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}") from exc

    data = _parse_content(text, str(path))
    try:
        return ClientConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid config at {path}: {exc}") from exc


# --- Precedence resolution ---


def resolve_config(
    config_path: Optional[str | Path] = None,
    base_url: Optional[str] = None,
) -> ClientConfig:
    """Resolve config with full precedence chain.

    Precedence (high to low):
        1. Explicit arguments (``base_url``)
        2. Environment variables (``RESTCLIENT_BASE_URL``,
           ``RESTCLIENT_TIMEOUT``, ``RESTCLIENT_VERIFY_SSL``)
        3. Config file (``config_path`` or ``RESTCLIENT_CONFIG``)
        4. Defaults

    Raises:
        ConfigError: If no base URL can be determined, or an environment
            override is malformed.
    """
    data: dict[str, Any] = {}

    # 3. Config file
    path = config_path or os.environ.get(ENV_CONFIG)
    if path:
        data = load_config(path).model_dump()

    request = dict(data.get("request") or {})

    # 2. Environment variables
    env_base_url = os.environ.get(ENV_BASE_URL)
    if env_base_url:
        data["base_url"] = env_base_url

    env_timeout = os.environ.get(ENV_TIMEOUT)
    if env_timeout:
        try:
            request["timeout"] = float(env_timeout)
        except ValueError as exc:
            raise ConfigError(
                f"{ENV_TIMEOUT} must be a number, got '{env_timeout}'"
            ) from exc

    env_verify = os.environ.get(ENV_VERIFY_SSL)
    if env_verify:
        request["verify_ssl"] = env_verify.strip().lower() not in _FALSE_VALUES

    # 1. Explicit arguments (highest precedence)
    if base_url is not None:
        data["base_url"] = base_url

    if not data.get("base_url"):
        raise ConfigError(
            f"No base URL configured (pass one, set {ENV_BASE_URL}, "
            f"or point {ENV_CONFIG} at a config file)"
        )

    data["request"] = request
    try:
        return ClientConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc


# --- Credential source resolution ---


def resolve_credential(source: str) -> str:
    """Resolve a credential from its source descriptor.

    Supported formats:
        - ``"env:VAR_NAME"`` -- reads ``os.environ["VAR_NAME"]``
        - ``"file:/path/to/file"`` -- reads file content, stripped of whitespace
        - ``"prompt"`` -- prompts user interactively (requires a TTY)

    Args:
        source: The source descriptor string.

    Returns:
        The resolved credential string.

    Raises:
        ConfigError: If the source can't be resolved.
    """
    if source.startswith("env:"):
        var_name = source[4:]
        value = os.environ.get(var_name)
        if value is None:
            raise ConfigError(
                f"Environment variable '{var_name}' is not set (source: {source})"
            )
        return value

    if source.startswith("file:"):
        file_path = source[5:]
        path = Path(file_path).expanduser()
        if not path.is_file():
            raise ConfigError(f"Credential file not found: {path} (source: {source})")
        try:
            return path.read_text(encoding="utf-8").strip()
        except OSError as exc:
            raise ConfigError(f"Cannot read credential file {path}: {exc}") from exc

    if source == "prompt":
        if not sys.stdin.isatty():
            raise ConfigError(
                "Cannot prompt for credentials: stdin is not a TTY (source: prompt)"
            )
        return getpass.getpass("Enter credential: ")

    raise ConfigError(f"Unknown credential source format: {source}")
