"""Schema validation utilities.

addonkit validates its merged configuration with JSON Schema. Schemas are
stored as YAML files under ``addonkit.data/schemas/``.
"""
from __future__ import annotations

from typing import Any, Dict, List

import jsonschema
from jsonschema import Draft202012Validator

from addonkit.core.exceptions import ConfigError
from addonkit.core.utils.io import read_yaml
from addonkit.data import get_data_path


def load_schema(schema_name: str) -> Dict[str, Any]:
    """Load a bundled schema dict.

    Automatically appends ``.yaml`` if no extension is present.

    Raises:
        FileNotFoundError: If schema file doesn't exist.
        ValueError: If schema is not a YAML mapping.
    """
    lowered = schema_name.lower()
    if not (lowered.endswith(".yaml") or lowered.endswith(".yml")):
        schema_name = f"{schema_name}.yaml"

    schema_path = get_data_path("schemas", schema_name)
    if not schema_path.exists():
        raise FileNotFoundError(f"Schema not found: {schema_name}")

    schema = read_yaml(schema_path, default=None, raise_on_error=True)
    if not isinstance(schema, dict):
        raise ValueError(f"Schema {schema_name} must be a YAML mapping")
    return schema


def _format_error(error: jsonschema.ValidationError) -> str:
    location = ".".join(str(p) for p in error.absolute_path) or "<root>"
    return f"{location}: {error.message}"


def validate_payload(payload: Any, schema_name: str) -> None:
    """Validate ``payload`` against a bundled schema.

    Raises:
        ConfigError: listing every validation error, sorted by location.
    """
    schema = load_schema(schema_name)
    validator = Draft202012Validator(schema)
    errors: List[jsonschema.ValidationError] = sorted(
        validator.iter_errors(payload), key=lambda e: [str(p) for p in e.absolute_path]
    )
    if errors:
        details = [_format_error(e) for e in errors]
        raise ConfigError(
            f"Configuration failed {schema_name} validation:\n  " + "\n  ".join(details),
            context={"schema": schema_name, "errors": details},
        )


__all__ = ["load_schema", "validate_payload"]
