"""Schema validation for activation documents.

Schemas are JSON Schema (Draft 2020-12) written as YAML and bundled under
``activator/data/schemas/``.
"""
from __future__ import annotations

from typing import Any, Dict, List

from jsonschema import Draft202012Validator

from activator.data import read_yaml as read_data_yaml

ACTIVATION_CONFIG_SCHEMA = "activation-config.schema.yaml"


def load_schema(schema_name: str = ACTIVATION_CONFIG_SCHEMA) -> Dict[str, Any]:
    """Load a bundled schema.

    Automatically appends ``.yaml`` if no extension is present.

    Raises:
        FileNotFoundError: If the schema file doesn't exist.
        ValueError: If the schema is not a YAML mapping.
    """
    lowered = schema_name.lower()
    if not (lowered.endswith(".yaml") or lowered.endswith(".yml")):
        schema_name = f"{schema_name}.yaml"

    schema = read_data_yaml("schemas", schema_name)
    if not isinstance(schema, dict):
        raise ValueError(f"Schema must be a YAML mapping, got {type(schema).__name__}")
    return schema


def validate_payload_safe(payload: Any, schema_name: str = ACTIVATION_CONFIG_SCHEMA) -> List[str]:
    """Validate ``payload`` and return readable error messages (empty if valid)."""
    try:
        schema = load_schema(schema_name)
    except (OSError, ValueError) as e:
        return [f"Schema loading failed: {e}"]

    errors: List[str] = []
    validator = Draft202012Validator(schema)
    for error in sorted(validator.iter_errors(payload), key=lambda e: [str(p) for p in e.path]):
        if error.path:
            path_str = ".".join(str(p) for p in error.path)
            errors.append(f"{path_str}: {error.message}")
        else:
            errors.append(error.message)
    return errors


__all__ = [
    "ACTIVATION_CONFIG_SCHEMA",
    "load_schema",
    "validate_payload_safe",
]
