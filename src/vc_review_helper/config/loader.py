"""
Configuration loader for vc_review_helper.

The tool reads an optional JSON configuration file named ``config.json``
located in the ``~/.aireview/`` directory in the user's home directory.
Values missing from the file fall back to :data:`DEFAULT_CONFIG`, and a
handful of environment variables override whatever the file says so the
model endpoint and credentials can be switched without editing it.

If the configuration file is malformed or holds values of the wrong
type, a :class:`ConfigError` is raised.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional


logger = logging.getLogger(__name__)
# Attach a null handler to avoid "No handler" warnings when the CLI has
# not configured logging (library use, unit tests).
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


CONFIG_FILE_NAME = "config.json"

DEFAULT_CONFIG: Dict[str, Any] = {
    "base_url": "http://localhost",
    "port": 11434,
    "model": "llama3.1",
    "request_timeout": 120,
    "max_tokens": None,
    "max_steps": 10,
    "exclude_files": ["dist", "bun.lock"],
    "api_key": None,
}

# Environment variable -> (config key, converter)
ENV_OVERRIDES = {
    "AIREVIEW_BASE_URL": ("base_url", str),
    "AIREVIEW_PORT": ("port", int),
    "AIREVIEW_MODEL": ("model", str),
    "OLLAMA_API_KEY": ("api_key", str),
}


class ConfigError(Exception):
    """Raised when the configuration file or environment is invalid."""

    pass


def _get_config_directory() -> Path:
    """Return the directory holding the aireview configuration (``~/.aireview/``)."""
    return Path.home() / ".aireview"


def _read_config_file(config_path: Path) -> Dict[str, Any]:
    try:
        content = config_path.read_text(encoding="utf-8")
        data = json.loads(content)
    except (OSError, json.JSONDecodeError) as exc:
        logger.error("Failed to read or parse configuration file: %s", exc)
        raise ConfigError(f"Invalid JSON in {config_path.name}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"{config_path.name} must contain a JSON object")
    return data


def _apply_env_overrides(config: Dict[str, Any]) -> None:
    for env_name, (key, convert) in ENV_OVERRIDES.items():
        raw = os.environ.get(env_name)
        if not raw:
            continue
        try:
            config[key] = convert(raw)
        except ValueError as exc:
            raise ConfigError(f"Environment variable {env_name} is invalid: {raw!r}") from exc
        logger.debug("Configuration key '%s' overridden by %s", key, env_name)


def _validate(config: Dict[str, Any]) -> None:
    if not isinstance(config.get("base_url"), str):
        raise ConfigError("'base_url' must be a string")
    if not isinstance(config.get("port"), int) or isinstance(config.get("port"), bool):
        raise ConfigError("'port' must be an integer")
    if not isinstance(config.get("model"), str) or not config["model"]:
        raise ConfigError("'model' must be a non-empty string")
    request_timeout = config.get("request_timeout")
    if not isinstance(request_timeout, (int, float)) or isinstance(request_timeout, bool):
        raise ConfigError("'request_timeout' must be a number")
    max_tokens = config.get("max_tokens")
    if max_tokens is not None and (not isinstance(max_tokens, int) or isinstance(max_tokens, bool)):
        raise ConfigError("'max_tokens' must be an integer")
    max_steps = config.get("max_steps")
    if not isinstance(max_steps, int) or isinstance(max_steps, bool) or max_steps < 1:
        raise ConfigError("'max_steps' must be a positive integer")
    exclude_files = config.get("exclude_files")
    if not isinstance(exclude_files, list) or not all(isinstance(name, str) for name in exclude_files):
        raise ConfigError("'exclude_files' must be a list of strings")
    if config.get("api_key") is not None and not isinstance(config["api_key"], str):
        raise ConfigError("'api_key' must be a string")


def load_config(config_dir: Optional[Path] = None) -> Dict[str, Any]:
    """Load the review configuration and return it.

    The file ``config.json`` in ``config_dir`` (``~/.aireview/`` by
    default) is read when it exists; every key it does not set keeps its
    value from :data:`DEFAULT_CONFIG`. Environment variables listed in
    :data:`ENV_OVERRIDES` are applied last.

    Args:
        config_dir: Directory to read ``config.json`` from. Defaults to
                    the user-level configuration directory.

    Returns:
        A dictionary containing the validated configuration with keys:
        - base_url (str): The base URL of the Ollama server
        - port (int): The port number
        - model (str): The model name
        - request_timeout (int|float): Request timeout in seconds
        - max_tokens (int|None): Maximum tokens per model response
        - max_steps (int): Maximum number of model steps per review
        - exclude_files (list[str]): File names never sent to the model
        - api_key (str|None): Bearer token for hosted endpoints

    Raises:
        ConfigError: If the configuration file is malformed or invalid.
    """
    config_dir = config_dir if config_dir is not None else _get_config_directory()
    config_path = config_dir / CONFIG_FILE_NAME

    config: Dict[str, Any] = dict(DEFAULT_CONFIG)
    config["exclude_files"] = list(DEFAULT_CONFIG["exclude_files"])
    if config_path.exists():
        data = _read_config_file(config_path)
        unknown = sorted(set(data) - set(DEFAULT_CONFIG))
        if unknown:
            logger.warning("Ignoring unknown configuration keys: %s", ", ".join(unknown))
        config.update({key: value for key, value in data.items() if key in DEFAULT_CONFIG})
        logger.debug("Loaded configuration from: %s", config_path)
    else:
        logger.debug("No configuration file at %s; using defaults", config_path)

    _apply_env_overrides(config)
    _validate(config)
    return config
