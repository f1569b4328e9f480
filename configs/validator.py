"""Configuration validation using JSON Schema."""

from __future__ import annotations

from copy import deepcopy
from typing import Any, Dict

from jsonschema import Draft7Validator, validators

from exceptions import ConfigValidationError
from log_config.logger import get_logger

logger = get_logger(__name__)

# JSON Schema for default.yaml; every section has defaults so partial files load
CONFIG_SCHEMA = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "properties": {
        "ingest": {
            "type": "object",
            "default": {},
            "properties": {
                "header_scan_rows": {"type": "integer", "minimum": 1, "maximum": 1000, "default": 15},
                "encoding": {"type": "string", "minLength": 1, "default": "utf-8-sig"},
                "strict": {"type": "boolean", "default": False},
            },
            "additionalProperties": False,
        },
        "dates": {
            "type": "object",
            "default": {},
            "properties": {
                "timezone": {"type": "string", "minLength": 1, "default": "UTC"},
                "dayfirst": {"type": "boolean", "default": False},
            },
            "additionalProperties": False,
        },
        "batch": {
            "type": "object",
            "default": {},
            "properties": {
                "max_workers": {"type": "integer", "minimum": 1, "maximum": 64, "default": 4},
            },
            "additionalProperties": False,
        },
        "analysis": {
            "type": "object",
            "default": {},
            "properties": {
                "view_by_session": {"type": "boolean", "default": True},
                "show_trend_lines": {"type": "boolean", "default": True},
                "max_comparison_players": {"type": "integer", "minimum": 1, "maximum": 10, "default": 3},
            },
            "additionalProperties": False,
        },
        "storage": {
            "type": "object",
            "default": {},
            "properties": {
                "path": {"type": "string", "minLength": 1, "default": "data/player_data.json"},
                "key": {"type": "string", "minLength": 1, "default": "baseline-player-data"},
            },
            "additionalProperties": False,
        },
        "report": {
            "type": "object",
            "default": {},
            "properties": {
                "dpi": {"type": "integer", "minimum": 50, "maximum": 600, "default": 100},
            },
            "additionalProperties": False,
        },
        "logging": {
            "type": "object",
            "default": {},
            "properties": {
                "level": {
                    "type": "string",
                    "enum": ["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"],
                    "default": "INFO",
                },
                "log_dir": {"type": ["string", "null"], "default": None},
            },
            "additionalProperties": False,
        },
    },
    "additionalProperties": False,
}


def extend_with_default(validator_class):
    """Extend a JSON Schema validator class so ``default`` values are filled in."""
    validate_properties = validator_class.VALIDATORS["properties"]

    def fill_defaults(validator, properties, instance, schema):
        if isinstance(instance, dict):
            for name, subschema in properties.items():
                if "default" in subschema:
                    instance.setdefault(name, deepcopy(subschema["default"]))
        yield from validate_properties(validator, properties, instance, schema)

    return validators.extend(validator_class, {"properties": fill_defaults})


Draft7Validator.check_schema(CONFIG_SCHEMA)
DefaultingValidator = extend_with_default(Draft7Validator)


def _describe(error) -> str:
    location = " -> ".join(str(part) for part in error.path) or "root"
    return f"{location}: {error.message}"


def validate_config(config: Dict[str, Any]) -> None:
    """Validate configuration against CONFIG_SCHEMA, filling in defaults.

    Args:
        config: Configuration dictionary (modified in place)

    Raises:
        ConfigValidationError: If configuration is invalid
    """
    errors = sorted(DefaultingValidator(CONFIG_SCHEMA).iter_errors(config), key=lambda e: list(map(str, e.path)))
    if not errors:
        logger.debug("Configuration validation passed")
        return

    messages = [_describe(error) for error in errors]
    logger.error("Configuration validation failed:\n  - " + "\n  - ".join(messages))
    raise ConfigValidationError(
        f"Invalid configuration ({len(messages)} problem(s)): {messages[0]}",
        validation_errors=messages,
    )


__all__ = ["validate_config", "CONFIG_SCHEMA"]
