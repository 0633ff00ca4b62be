"""Services package for the PenguinWhisk Manifest Compiler."""

from __future__ import annotations

from typing import Optional

from whisk_compiler.services.compilation import CompilationService


def get_compiler() -> Optional[CompilationService]:
    """Get compilation service instance (request-scoped).

    Returns:
        CompilationService instance or None if not initialized
    """
    from flask import current_app

    return current_app.extensions.get('compiler')


__all__ = [
    'get_compiler',
    'CompilationService',
]
