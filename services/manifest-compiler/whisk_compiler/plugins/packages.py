"""
OpenWhisk Package compiler plugin.

Packages group related actions together and provide default parameters
inherited by every action inside them.

Package sources:
    1. Explicit entries under ``resources.packages`` in the manifest
    2. Implicit packages derived from function names of the form
       ``<package>/<action>``; an implicit package that is not declared
       gets an empty entry

Compiled descriptor (deploy client wire shape):
    {
        "name": "pkg",
        "overwrite": true,
        "namespace": "ns",
        "package": {"parameters": [{"key": "k", "value": "v"}]}  # optional
    }

Overwrite resolution: package params, then provider, then ``True``.
"""

from __future__ import annotations

import json
from typing import Any

from whisk_compiler.host import CompilationError, Framework
from whisk_compiler.utils.serializers import serialize_parameters, split_package_name
from whisk_compiler.utils.validators import (
    ValidationError,
    validate_descriptor,
    validate_parameters,
)


class CompilePackages:
    """Compiles manifest packages into ``service.packages``."""

    def __init__(self, framework: Framework, options: dict[str, Any]):
        self.framework = framework
        self.options = options

        self.hooks = {
            'before:package:compileEvents': self.prepare,
            'package:compileEvents': self.compile_packages,
        }

    def prepare(self) -> None:
        self.setup()
        self.merge_action_packages()

    def setup(self) -> None:
        # Passed directly to the OpenWhisk deploy client
        self.framework.service.packages = {}

    def merge_action_packages(self) -> None:
        """Ensure every implicit package has a manifest entry."""
        packages = self.get_action_packages()
        if not packages:
            return

        service = self.framework.service
        if not service.resources:
            service.resources = {}

        if not service.resources.get('packages'):
            service.resources['packages'] = {}

        manifest_packages = service.resources['packages']
        for package in packages:
            manifest_packages[package] = manifest_packages.get(package) or {}

    def get_action_packages(self) -> list[str]:
        """Collect package names from ``<package>/<action>`` function names.

        Returns:
            Package names in first-seen order, without duplicates.
        """
        service = self.framework.service
        action_packages: dict[str, None] = {}

        for name in service.get_all_functions():
            func = service.get_function(name)
            if not func.get('name'):
                continue
            if not isinstance(func['name'], str):
                raise ValidationError(f'Function {name} name must be a string', field='name')
            package, _ = split_package_name(func['name'])
            if package:
                action_packages[package] = None

        return list(action_packages)

    def compile_package(self, name: str, params: dict[str, Any]) -> dict[str, Any]:
        """Compile a single package descriptor.

        Args:
            name: Package name.
            params: Package entry from ``resources.packages``.

        Returns:
            Package descriptor for the deploy client.
        """
        provider = self.framework.service.provider
        package: dict[str, Any] = {'name': name, 'overwrite': True}

        package['namespace'] = params.get('namespace') or provider.get('namespace')

        if 'overwrite' in params:
            package['overwrite'] = params['overwrite']
        elif 'overwrite' in provider:
            package['overwrite'] = provider['overwrite']

        if params.get('parameters'):
            validate_parameters(params['parameters'], field=f'packages.{name}.parameters')
            package['package'] = {
                'parameters': serialize_parameters(params['parameters']),
            }

        validate_descriptor(package, 'name')

        if self.options.get('verbose'):
            self.framework.cli.log(f'Compiled Package ({name}): {json.dumps(package)}')

        return package

    def compile_packages(self) -> None:
        """Compile every manifest package into ``service.packages``.

        Raises:
            CompilationError: If the packages output section is missing.
        """
        self.framework.cli.log('Compiling Packages...')

        service = self.framework.service
        manifest_resources = service.resources
        ow_packages = service.packages

        if ow_packages is None:
            raise CompilationError(
                'Missing Packages section from OpenWhisk Resource Manager template'
            )

        if manifest_resources and manifest_resources.get('packages'):
            for name, params in manifest_resources['packages'].items():
                ow_packages[name] = self.compile_package(name, params or {})
