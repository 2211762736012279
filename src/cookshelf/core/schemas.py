"""Schema validation for Cookshelf's YAML files.

The Cookfile, the lockfile and the configuration file are validated with
JSON Schema. Schemas are stored as YAML under ``cookshelf.data/schemas/``.
"""
from __future__ import annotations

from typing import Any, Dict, List

from jsonschema import Draft202012Validator

from cookshelf.data import read_yaml


def load_schema(schema_name: str) -> Dict[str, Any]:
    """Load a bundled schema by name (``.schema.yaml`` is appended when missing)."""
    if not schema_name.endswith(".yaml"):
        schema_name = f"{schema_name}.schema.yaml"
    schema = read_yaml("schemas", schema_name)
    if not isinstance(schema, dict):
        raise ValueError(f"Schema must be a YAML mapping, got {type(schema).__name__}")
    return schema


def schema_errors(payload: Any, schema_name: str) -> List[str]:
    """Validate a payload and return error messages (empty if valid)."""
    validator = Draft202012Validator(load_schema(schema_name))
    errors: List[str] = []
    for error in sorted(validator.iter_errors(payload), key=lambda e: [str(p) for p in e.path]):
        if error.path:
            path_str = ".".join(str(p) for p in error.path)
            errors.append(f"{path_str}: {error.message}")
        else:
            errors.append(error.message)
    return errors


__all__ = ["load_schema", "schema_errors"]
