"""Validation utilities for manifest entries and compiled descriptors.

Implements OpenWhisk naming rules and the mandatory-field checks applied
while compiling a service manifest.
"""

from __future__ import annotations

import json
import re
from typing import Any

from werkzeug.exceptions import BadRequest

# OpenWhisk naming rules
ENTITY_NAME_PATTERN = re.compile(r'^[a-zA-Z0-9_@.\-]+$')
MAX_NAME_LENGTH = 256
MAX_PARAMETER_SIZE = 1 * 1024 * 1024  # 1 MB


class ValidationError(BadRequest):
    """Raised when a manifest entry is malformed."""

    def __init__(self, message: str, field: str | None = None):
        """Initialize validation error.

        Args:
            message: Error message.
            field: Field name that failed validation.
        """
        super().__init__(message)
        self.field = field
        self.message = message

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary format.

        Returns:
            Dictionary with error details.
        """
        result = {
            'error': self.message,
        }
        if self.field:
            result['field'] = self.field
        return result


def validate_entity_name(name: str, field: str = 'name') -> None:
    """Validate OpenWhisk entity name.

    OpenWhisk naming rules:
    - Must match pattern: [a-zA-Z0-9_@.-]+
    - Maximum length: 256 characters
    - Cannot be empty

    Args:
        name: Entity name to validate.
        field: Field name for error messages.

    Raises:
        ValidationError: If name is invalid.
    """
    if not name:
        raise ValidationError(f'{field} cannot be empty', field=field)

    if not isinstance(name, str):
        raise ValidationError(f'{field} must be a string', field=field)

    if len(name) > MAX_NAME_LENGTH:
        raise ValidationError(
            f'{field} exceeds maximum length of {MAX_NAME_LENGTH} characters',
            field=field,
        )

    if not ENTITY_NAME_PATTERN.match(name):
        raise ValidationError(
            f'{field} must contain only letters, numbers, and characters: _ @ . -',
            field=field,
        )


def validate_namespace_name(name: str) -> None:
    """Validate namespace name.

    Namespace names follow same rules as entity names.

    Args:
        name: Namespace name to validate.

    Raises:
        ValidationError: If name is invalid.
    """
    validate_entity_name(name, field='namespace')


def validate_parameters(parameters: dict[str, Any], field: str = 'parameters') -> None:
    """Validate a parameters map declared in the manifest.

    Args:
        parameters: Parameter dictionary.
        field: Field name for error messages.

    Raises:
        ValidationError: If parameters are not a map or exceed the size limit.
    """
    if not parameters:
        return

    if not isinstance(parameters, dict):
        raise ValidationError(f'{field} must be a map of key/value pairs', field=field)

    param_size = len(json.dumps(parameters).encode('utf-8'))
    if param_size > MAX_PARAMETER_SIZE:
        size_kb = param_size / 1024
        max_kb = MAX_PARAMETER_SIZE / 1024
        raise ValidationError(
            f'Parameter size ({size_kb:.2f} KB) exceeds '
            f'maximum size of {max_kb} KB',
            field=field,
        )


def require_property(obj: dict[str, Any], prop: str, owner: str) -> Any:
    """Return a mandatory property of a manifest object.

    Presence is checked, not truthiness: an empty string counts as given.

    Args:
        obj: Manifest object to read.
        prop: Property name.
        owner: Description of the object for error messages.

    Raises:
        ValidationError: If the property is missing.
    """
    if prop not in obj:
        raise ValidationError(
            f'Missing mandatory {prop} property from {owner}',
            field=prop,
        )
    return obj[prop]


def validate_descriptor(descriptor: dict[str, Any], name_field: str) -> None:
    """Check a compiled descriptor before it is handed to the deploy client.

    Args:
        descriptor: Compiled package, trigger or rule descriptor.
        name_field: Key holding the descriptor's name.

    Raises:
        ValidationError: If name or namespace is empty.
    """
    if not descriptor.get(name_field):
        raise ValidationError(f'{name_field} cannot be empty', field=name_field)
    if not descriptor.get('namespace'):
        raise ValidationError(
            f'namespace cannot be empty for {descriptor[name_field]}',
            field='namespace',
        )
