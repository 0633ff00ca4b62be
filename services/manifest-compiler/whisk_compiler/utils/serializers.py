"""Serialization helpers for OpenWhisk deploy descriptors.

Converts manifest maps into the list shapes the deploy client sends over
the OpenWhisk REST API.
"""

from __future__ import annotations

from typing import Any


def serialize_parameters(parameters: dict[str, Any]) -> list[dict[str, Any]]:
    """Serialize a parameters map to OpenWhisk key/value format.

    Args:
        parameters: Parameter dictionary from the manifest.

    Returns:
        List of ``{'key': ..., 'value': ...}`` entries in map order.
    """
    return [{'key': key, 'value': value} for key, value in parameters.items()]


def build_fqn(namespace: str, package: str | None, name: str) -> str:
    """Build fully qualified name for OpenWhisk entity.

    Args:
        namespace: Namespace name.
        package: Optional package name.
        name: Entity name.

    Returns:
        Fully qualified name in format: /namespace/[package/]name
    """
    if package:
        return f'/{namespace}/{package}/{name}'
    return f'/{namespace}/{name}'


def split_package_name(name: str) -> tuple[str | None, str]:
    """Split a ``package/action`` function name.

    Returns:
        Tuple of (package, action); package is None for unpackaged names.
    """
    package, sep, action = name.rpartition('/')
    if not sep or not package or not action:
        return None, name
    return package, action
