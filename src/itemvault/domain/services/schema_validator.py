"""Item validation against collection JSON Schemas.

Compiles a collection schema with jsonschema and checks candidate items
against it. Results are returned as values: an invalid schema is reported as
a validation failure, never raised.
"""

import json
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any

from jsonschema import Draft202012Validator
from jsonschema.exceptions import SchemaError
from jsonschema.protocols import Validator
from jsonschema.validators import validator_for

INVALID_SCHEMA_PREFIX = "Invalid JSON Schema"
ROOT_PATH = "/"


@dataclass
class ValidationResult:
    """Outcome of validating one candidate against one schema."""

    valid: bool
    errors: list[str] = field(default_factory=list)


def _pointer(path: Any) -> str:
    parts = [str(part) for part in path]
    if not parts:
        return ROOT_PATH
    return ROOT_PATH + "/".join(parts)


@lru_cache(maxsize=128)
def _compile(canonical_schema: str) -> Validator:
    schema = json.loads(canonical_schema)
    validator_cls = validator_for(schema, default=Draft202012Validator)
    validator_cls.check_schema(schema)
    return validator_cls(schema)


def compile_schema(schema: Any) -> Validator:
    """Compile a schema into a validator.

    Raises:
        SchemaError: If the schema is not a valid JSON Schema object.
    """
    if not isinstance(schema, dict):
        raise SchemaError(f"schema must be an object, got {type(schema).__name__}")
    return _compile(json.dumps(schema, sort_keys=True))


def check_schema(schema: Any) -> list[str]:
    """Return compile errors for a schema, or an empty list if it is usable."""
    try:
        compile_schema(schema)
    except SchemaError as e:
        return [f"{INVALID_SCHEMA_PREFIX}: {e.message}"]
    return []


def validate_item(candidate: Any, schema: Any) -> ValidationResult:
    """Validate a candidate item against a JSON Schema.

    Every violation is reported, one message per rule, formatted as
    '<json pointer>: <reason>' with '/' standing for the document root.

    Args:
        candidate: The item data to check.
        schema: The collection's JSON Schema.

    Returns:
        ValidationResult with valid=True, or valid=False and the messages.
    """
    try:
        validator = compile_schema(schema)
    except SchemaError as e:
        return ValidationResult(valid=False, errors=[f"{INVALID_SCHEMA_PREFIX}: {e.message}"])

    violations = sorted(
        validator.iter_errors(candidate),
        key=lambda error: [str(part) for part in error.absolute_path],
    )
    if not violations:
        return ValidationResult(valid=True)

    return ValidationResult(
        valid=False,
        errors=[f"{_pointer(error.absolute_path)}: {error.message}" for error in violations],
    )
