"""Rule configuration loader.

This module handles loading YAML/JSON rule overrides and validating them,
merged over the built-in tables, against GateConfig. It provides clear,
user-friendly error messages.
"""

import json
import pathlib
from typing import Optional, Union

import yaml

from utils import PathValidationError, get_logger, resolve_existing_file

from .defaults import DEFAULT_RULES, get_default_config
from .schema import GateConfig

logger = get_logger(__name__)


class RuleConfigError(Exception):
    """Raised when a rule configuration cannot be loaded or validated."""

    pass


def load_config_file(config_path: Union[str, pathlib.Path]) -> dict:
    """Load rule overrides from a YAML or JSON file.

    Args:
        config_path: Path to configuration file

    Returns:
        Dictionary containing configuration

    Raises:
        RuleConfigError: If file cannot be loaded or parsed
    """
    try:
        config_path = resolve_existing_file(config_path)
    except PathValidationError as e:
        raise RuleConfigError(f"Invalid rules path: {e}") from e
    except FileNotFoundError as e:
        raise RuleConfigError(f"Rules file not found: {config_path}") from e

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            if config_path.suffix.lower() in (".yaml", ".yml"):
                config = yaml.safe_load(f)
            elif config_path.suffix.lower() == ".json":
                config = json.load(f)
            else:
                raise RuleConfigError(
                    f"Unsupported file format: {config_path.suffix}. "
                    "Supported formats: .yaml, .yml, .json"
                )
    except OSError as e:
        raise RuleConfigError(f"Failed to read rules file {config_path}: I/O error: {e}") from e
    except yaml.YAMLError as e:
        raise RuleConfigError(f"Invalid YAML syntax in {config_path}: {e}") from e
    except json.JSONDecodeError as e:
        raise RuleConfigError(f"Invalid JSON syntax in {config_path}: {e}") from e
    except UnicodeDecodeError as e:
        raise RuleConfigError(f"Failed to decode rules file {config_path}: Encoding error: {e}") from e

    if config is None:
        raise RuleConfigError("Rules file is empty")

    if not isinstance(config, dict):
        raise RuleConfigError(
            f"Rules file must contain a mapping, got {type(config).__name__}"
        )

    return config


def build_config(overrides: Optional[dict] = None) -> GateConfig:
    """Validate overrides merged over the built-in tables.

    Within each section (``emotional``, ``security``, ``independence``) a
    field present in ``overrides`` replaces the built-in field as a whole;
    fields not mentioned keep their built-in value. ``excluded_dirs`` is
    replaced outright.

    Args:
        overrides: Optional mapping of top-level sections

    Returns:
        Validated, immutable GateConfig

    Raises:
        RuleConfigError: If validation fails
    """
    if not overrides:
        return get_default_config()

    merged = dict(DEFAULT_RULES)
    for section, value in overrides.items():
        default = DEFAULT_RULES.get(section)
        if isinstance(default, dict) and isinstance(value, dict):
            merged[section] = {**default, **value}
        else:
            merged[section] = value

    try:
        return GateConfig(**merged)
    except Exception as e:
        error_msg = _format_validation_error(e)
        raise RuleConfigError(f"Rule configuration is invalid:\n{error_msg}") from e


def _format_validation_error(error: Exception) -> str:
    """Format validation error for user-friendly display.

    Args:
        error: Exception from Pydantic validation

    Returns:
        Formatted error message
    """
    if hasattr(error, "errors"):
        errors = []
        for err in error.errors():
            field_path = " -> ".join(str(loc) for loc in err.get("loc", []))
            error_msg = err.get("msg", "Validation error")
            error_type = err.get("type", "unknown")
            errors.append(f"  {field_path}: {error_msg} ({error_type})")
        return "\n".join(errors)

    return str(error)


def load_rule_config(config_path: Union[str, pathlib.Path, None] = None) -> GateConfig:
    """Load the gate configuration, optionally overridden from a file.

    This is the main entry point for rule configuration.

    Args:
        config_path: Optional path to a YAML or JSON override file

    Returns:
        Validated GateConfig instance

    Raises:
        RuleConfigError: If loading or validation fails
    """
    if config_path is None:
        return get_default_config()

    overrides = load_config_file(config_path)
    config = build_config(overrides)
    logger.info(f"Loaded rule overrides from {config_path}: {', '.join(sorted(overrides))}")
    return config
