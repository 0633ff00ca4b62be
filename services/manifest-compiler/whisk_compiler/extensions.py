"""Flask extension initialization for PenguinWhisk Manifest Compiler."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from flask import Flask


def init_compiler(app: Flask) -> None:
    """Initialize compilation service.

    Args:
        app: Flask application instance.
    """
    from whisk_compiler.services.compilation import CompilationService

    compiler = CompilationService(
        default_namespace=app.config.get('WHISK_NAMESPACE'),
        verbose=app.config.get('COMPILE_VERBOSE', False),
    )
    app.extensions['compiler'] = compiler
    app.logger.info(
        f"Compilation service initialized "
        f"(default namespace: {compiler.default_namespace})"
    )


def init_extensions(app: Flask) -> None:
    """Initialize Flask extensions.

    Args:
        app: Flask application instance.
    """
    init_compiler(app)
