"""JSON Schema validation for activation documents."""
from __future__ import annotations

from .validation import load_schema, validate_payload_safe

__all__ = ["load_schema", "validate_payload_safe"]
