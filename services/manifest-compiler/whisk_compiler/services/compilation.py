"""
Manifest compilation service.

Runs the ``package`` lifecycle of the in-process host with every compiler
plugin registered and returns the compiled OpenWhisk resources.

Compilation flow:
1. Copy the manifest into a fresh Service (caller data is never mutated)
2. Apply configured provider defaults
3. Dispatch lifecycle hooks: setup/merge, then compile
4. Return packages, triggers and rules keyed by resource name

Every call builds new output maps, so identical manifests compile to
identical results.
"""

from __future__ import annotations

import logging
from typing import Any

from whisk_compiler.host import Cli, Framework, PluginManager, Service
from whisk_compiler.plugins import COMPILE_PLUGINS
from whisk_compiler.utils.validators import (
    ValidationError,
    validate_entity_name,
    validate_namespace_name,
)

logger = logging.getLogger(__name__)


class CompilationService:
    """Compiles service manifests into OpenWhisk deploy descriptors."""

    def __init__(
        self,
        default_namespace: str | None = None,
        verbose: bool = False,
        plugins: list[type] | None = None,
    ):
        """
        Initialize compilation service.

        Args:
            default_namespace: Provider namespace used when the manifest sets none
            verbose: Log every compiled descriptor
            plugins: Plugin classes to register, defaults to all compilers
        """
        self.default_namespace = default_namespace
        self.verbose = verbose
        self.plugins = plugins if plugins is not None else list(COMPILE_PLUGINS)

    def build_framework(self, manifest: dict[str, Any]) -> Framework:
        """Create the host context for one manifest.

        Raises:
            ValidationError: If the manifest shape is invalid.
        """
        if not isinstance(manifest, dict):
            raise ValidationError('Manifest must be a JSON object')

        for section in ('provider', 'functions', 'resources'):
            value = manifest.get(section)
            if value is not None and not isinstance(value, dict):
                raise ValidationError(f'{section} must be an object', field=section)

        for name, func in (manifest.get('functions') or {}).items():
            if not isinstance(func, dict):
                raise ValidationError(f'Function {name} must be an object', field='functions')
            if func.get('name') is not None and not isinstance(func['name'], str):
                raise ValidationError(f'Function {name} name must be a string', field='name')
            if func.get('events') is not None and not isinstance(func['events'], list):
                raise ValidationError(f'Function {name} events must be a list', field='events')

        resources = manifest.get('resources') or {}
        for section in ('packages', 'triggers'):
            entries = resources.get(section)
            if entries is None:
                continue
            if not isinstance(entries, dict):
                raise ValidationError(
                    f'resources.{section} must be an object', field=f'resources.{section}'
                )
            for name, params in entries.items():
                if params is not None and not isinstance(params, dict):
                    raise ValidationError(
                        f'resources.{section}.{name} must be an object',
                        field=f'resources.{section}.{name}',
                    )

        service = Service.from_manifest(manifest)
        validate_entity_name(service.service, field='service')

        if not service.provider.get('namespace') and self.default_namespace:
            service.provider['namespace'] = self.default_namespace
        if service.provider.get('namespace'):
            validate_namespace_name(service.provider['namespace'])

        return Framework(service=service, cli=Cli(logger))

    def compile(self, manifest: dict[str, Any], verbose: bool | None = None) -> dict[str, Any]:
        """
        Compile a manifest.

        Args:
            manifest: Service manifest
            verbose: Override the service-level verbose flag

        Returns:
            Dict with ``packages``, ``triggers`` and ``rules`` maps

        Raises:
            ValidationError: If the manifest is malformed
            CompilationError: If a compiler output section is missing
        """
        framework = self.build_framework(manifest)
        options = {'verbose': self.verbose if verbose is None else verbose}

        manager = PluginManager(framework, options)
        for plugin_class in self.plugins:
            manager.add_plugin(plugin_class)

        logger.info(f'Compiling service {framework.service.service}')
        manager.run('package')

        service = framework.service
        result = {
            'packages': service.packages or {},
            'triggers': service.triggers or {},
            'rules': service.rules or {},
        }

        logger.info(
            f'Compiled service {service.service}: '
            f'{len(result["packages"])} packages, '
            f'{len(result["triggers"])} triggers, '
            f'{len(result["rules"])} rules'
        )
        return result
