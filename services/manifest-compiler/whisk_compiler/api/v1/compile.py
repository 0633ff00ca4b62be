"""
Manifest compile endpoint.

Endpoints:
- POST /api/v1/compile
  Compile a service manifest into OpenWhisk packages, triggers and rules.

Query parameters:
- verbose: "true" logs every compiled descriptor

Request body (JSON):
    {
        "service": "my-service",
        "provider": {"namespace": "ns", "overwrite": true},
        "functions": {
            "hello": {
                "name": "utils/hello",
                "events": [{"trigger": "my_trigger"}]
            }
        },
        "resources": {"packages": {}, "triggers": {}}
    }

Response body (JSON):
    {"packages": {...}, "triggers": {...}, "rules": {...}}
"""

from __future__ import annotations

from typing import Any

from flask import Blueprint, jsonify, request

from whisk_compiler.services import get_compiler
from whisk_compiler.utils.validators import ValidationError

# Create Blueprint
compile_bp = Blueprint('compile', __name__)


@compile_bp.route('/compile', methods=['POST'])
def compile_manifest() -> tuple[Any, int]:
    """Compile the posted manifest.

    Returns:
        JSON response with compiled resources and HTTP status code
    """
    manifest = request.get_json(silent=True)
    if not isinstance(manifest, dict):
        raise ValidationError('Request body must be a JSON object')

    verbose = None
    if 'verbose' in request.args:
        verbose = request.args.get('verbose', 'false').lower() == 'true'

    compiler = get_compiler()
    if compiler is None:
        return jsonify({
            'error': 'Compilation service unavailable',
            'code': 503,
        }), 503

    return jsonify(compiler.compile(manifest, verbose=verbose)), 200
