"""In-process host for the manifest compiler plugins.

The compiler plugins are written against a deployment framework that owns
the service model, the CLI and the lifecycle hook dispatch. This module
provides that surface:

- Service: the manifest configuration tree plus the compiled output maps
- Cli: user-facing log output routed through ``logging``
- Framework: bundles the service and CLI handed to every plugin
- PluginManager: ordered hook registration and lifecycle dispatch

Lifecycle model:
    A command (e.g. ``package``) is a fixed list of lifecycle events. For
    every event the manager calls, in order, the hooks registered under
    ``before:<command>:<event>``, ``<command>:<event>`` and
    ``after:<command>:<event>``. Hooks of the same key run in plugin
    registration order. The first exception aborts the run.
"""

from __future__ import annotations

import copy
import logging
from typing import Any, Callable

logger = logging.getLogger(__name__)

# Lifecycle events per command, in dispatch order
LIFECYCLES: dict[str, list[str]] = {
    'package': [
        'cleanup',
        'initialize',
        'setupProviderConfiguration',
        'createDeploymentArtifacts',
        'compileFunctions',
        'compileEvents',
        'finalize',
    ],
}


class CompilationError(Exception):
    """Raised when the host is misconfigured for a compile step."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary format.

        Returns:
            Dictionary with error details.
        """
        return {
            'error': self.message,
            'code': 500,
        }


class Service:
    """Service manifest plus compiled OpenWhisk resources."""

    def __init__(
        self,
        service: str = '',
        provider: dict[str, Any] | None = None,
        functions: dict[str, dict[str, Any]] | None = None,
        resources: dict[str, Any] | None = None,
    ):
        self.service = service
        self.provider = provider if provider is not None else {}
        self.functions = functions if functions is not None else {}
        self.resources = resources

        # Output containers, created by the compiler plugins' setup hooks
        self.packages: dict[str, Any] | None = None
        self.triggers: dict[str, Any] | None = None
        self.rules: dict[str, Any] | None = None

    @classmethod
    def from_manifest(cls, manifest: dict[str, Any]) -> Service:
        """Build a service from a manifest dictionary.

        The manifest is deep-copied so compiling never mutates the caller's
        data.
        """
        manifest = copy.deepcopy(manifest)
        return cls(
            service=manifest.get('service') or '',
            provider=manifest.get('provider') or {},
            functions=manifest.get('functions') or {},
            resources=manifest.get('resources'),
        )

    def get_all_functions(self) -> list[str]:
        return list(self.functions)

    def get_function(self, name: str) -> dict[str, Any]:
        """Get a function object by its manifest key.

        Raises:
            CompilationError: If the function is not declared.
        """
        if name not in self.functions:
            raise CompilationError(
                f'Function "{name}" doesn\'t exist in this Service'
            )
        return self.functions[name]


class Cli:
    """User-facing output of the host framework."""

    def __init__(self, log: logging.Logger | None = None):
        self._logger = log or logging.getLogger('whisk_compiler.cli')

    def log(self, message: str) -> None:
        self._logger.info(message)


class Framework:
    """Host context handed to every plugin."""

    def __init__(self, service: Service | None = None, cli: Cli | None = None):
        self.service = service or Service()
        self.cli = cli or Cli()


class PluginManager:
    """Registers plugins and dispatches lifecycle hooks."""

    def __init__(self, framework: Framework, options: dict[str, Any] | None = None):
        self.framework = framework
        self.options = options or {}
        self.plugins: list[Any] = []
        self.hooks: dict[str, list[Callable[[], Any]]] = {}

    def add_plugin(self, plugin_class: type) -> Any:
        """Instantiate a plugin and register its hooks.

        Args:
            plugin_class: Plugin class taking ``(framework, options)``.

        Returns:
            The plugin instance.
        """
        plugin = plugin_class(self.framework, self.options)
        self.plugins.append(plugin)

        for event, hook in getattr(plugin, 'hooks', {}).items():
            self.hooks.setdefault(event, []).append(hook)

        logger.debug(f'Registered plugin {plugin_class.__name__}')
        return plugin

    def get_hooks(self, event: str) -> list[Callable[[], Any]]:
        return list(self.hooks.get(event, []))

    def run(self, command: str) -> None:
        """Run every lifecycle event of a command.

        Args:
            command: Command name, e.g. ``package``.

        Raises:
            ValueError: If the command has no known lifecycle.
        """
        if command not in LIFECYCLES:
            raise ValueError(f'Unknown command: {command}')

        for event in LIFECYCLES[command]:
            for key in (
                f'before:{command}:{event}',
                f'{command}:{event}',
                f'after:{command}:{event}',
            ):
                for hook in self.get_hooks(key):
                    hook()
