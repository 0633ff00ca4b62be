"""PenguinWhisk Manifest Compiler API v1 blueprint.

Registers all v1 API endpoints and their error handlers.
"""

from __future__ import annotations

import logging
from typing import Any

from flask import Blueprint, jsonify
from werkzeug.exceptions import HTTPException

from whisk_compiler.api.v1.compile import compile_bp
from whisk_compiler.host import CompilationError
from whisk_compiler.utils.validators import ValidationError

logger = logging.getLogger(__name__)

# Create main API v1 blueprint
v1_bp = Blueprint("v1", __name__)

# Register sub-blueprints
v1_bp.register_blueprint(compile_bp)


# Error handlers
@v1_bp.errorhandler(ValidationError)
def handle_validation_error(error: ValidationError) -> tuple[Any, int]:
    """Handle manifest validation errors.

    Args:
        error: ValidationError instance.

    Returns:
        JSON response with error details and 400 status code.
    """
    logger.warning(f'Manifest rejected: {error.message}')
    return jsonify(error.to_dict()), 400


@v1_bp.errorhandler(CompilationError)
def handle_compilation_error(error: CompilationError) -> tuple[Any, int]:
    """Handle compiler setup errors.

    Args:
        error: CompilationError instance.

    Returns:
        JSON response with error details and 500 status code.
    """
    logger.error(f'Compilation failed: {error.message}')
    return jsonify(error.to_dict()), 500


@v1_bp.app_errorhandler(404)
def handle_not_found(error: HTTPException) -> tuple[Any, int]:
    """Handle 404 Not Found errors.

    Args:
        error: HTTPException instance.

    Returns:
        JSON response with error details and 404 status code.
    """
    return jsonify({
        'error': 'Resource not found',
        'code': 404,
    }), 404


@v1_bp.app_errorhandler(500)
def handle_internal_error(error: HTTPException) -> tuple[Any, int]:
    """Handle 500 Internal Server errors.

    Args:
        error: HTTPException instance.

    Returns:
        JSON response with error details and 500 status code.
    """
    return jsonify({
        'error': 'Internal server error',
        'code': 500,
    }), 500


@v1_bp.errorhandler(Exception)
def handle_generic_error(error: Exception) -> tuple[Any, int]:
    """Handle generic exceptions.

    HTTP errors keep their status code; anything else is a 500.

    Args:
        error: Exception instance.

    Returns:
        JSON response with error details and status code.
    """
    if isinstance(error, HTTPException):
        return jsonify({
            'error': error.description,
            'code': error.code,
        }), error.code

    logger.exception('Unhandled exception in API v1')

    return jsonify({
        'error': 'An unexpected error occurred',
        'code': 500,
    }), 500


# Health check endpoint for v1
@v1_bp.route('/health', methods=['GET'])
def health() -> dict[str, str]:
    """Health check endpoint for API v1.

    Returns:
        JSON response indicating API v1 health status.
    """
    return jsonify({
        'status': 'healthy',
        'version': 'v1',
    })


__all__ = ["v1_bp"]
