"""Loading ``config.yaml`` with ``${VAR}`` placeholders resolved from the environment."""

import os
import re
from pathlib import Path

import yaml
from loguru import logger
from pydantic import ValidationError

from src.bookshelf.runtime.config.config_data import ConfigData
from src.bookshelf.runtime.settings import EnvironmentVariables

_PLACEHOLDER = re.compile(r"\$\{([^}]+)\}")


def _resolve(expression: str) -> str:
    name, sep, rest = expression.partition(":-")
    if sep:
        return os.environ.get(name, rest)

    name, sep, hint = expression.partition(":?")
    value = os.environ.get(name)
    if value is not None:
        return value
    if sep:
        raise ValueError(f"Required environment variable {name}: {hint}")
    raise ValueError(f"Required environment variable {name} is not set")


def substitute_env_vars(text: str) -> str:
    """Replace every placeholder in ``text`` with its environment value.

    ``${NAME}`` must be set, ``${NAME:-fallback}`` falls back when unset,
    and ``${NAME:?hint}`` must be set and reports ``hint`` when it is not.

    Raises:
        ValueError: a required variable is unset.
    """
    return _PLACEHOLDER.sub(lambda match: _resolve(match.group(1)), text)


def apply_environment_overrides(env_mode: str) -> list[str]:
    """Copy ``<ENV>_FOO`` variables onto ``FOO`` for the active environment.

    Returns the names of the variables that were set.
    """
    prefix = f"{env_mode.upper()}_"
    applied = []
    for name, value in list(os.environ.items()):
        if name.startswith(prefix):
            target = name.removeprefix(prefix)
            os.environ[target] = value
            applied.append(target)
    if applied:
        logger.bind(environment=env_mode, variables=applied).debug(
            "config.environment_overrides"
        )
    return applied


def load_templated_yaml(file_path: Path) -> ConfigData:
    """Parse the ``config:`` section of a templated YAML file.

    Raises:
        FileNotFoundError: ``file_path`` does not exist.
        ValueError: a required variable is unset, the YAML is malformed,
            or the values do not fit :class:`ConfigData`.
    """
    raw = Path(file_path).read_text()

    env_mode = EnvironmentVariables().environment
    apply_environment_overrides(env_mode)

    try:
        document = yaml.safe_load(substitute_env_vars(raw))
    except yaml.YAMLError as e:
        raise ValueError(f"Error parsing YAML in {file_path}: {e}") from e
    if not isinstance(document, dict):
        raise ValueError(f"Error parsing YAML in {file_path}: expected a mapping")

    try:
        config = ConfigData.model_validate(document.get("config") or {})
    except ValidationError as e:
        raise ValueError(f"Invalid configuration in {file_path}: {e}") from e

    logger.bind(path=str(file_path), environment=env_mode).info("config.loaded")
    return config


def load_config(file_path: Path) -> ConfigData:
    """Load configuration from ``file_path``, or defaults when it is absent."""
    if not file_path.exists():
        logger.warning("Configuration file {} not found; using defaults", file_path)
        return ConfigData()
    return load_templated_yaml(file_path)
