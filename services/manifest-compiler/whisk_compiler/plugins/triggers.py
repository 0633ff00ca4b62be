"""
OpenWhisk Trigger compiler plugin.

Triggers are named event channels fired manually or by feeds. Every trigger
referenced from a function's events must exist before the rules binding it
are created, so referenced triggers are merged into ``resources.triggers``
the same way implicit packages are.

Feeds:
    ``feed: /whisk.system/alarms/alarm`` attaches the trigger to a feed
    action. The first path segment is the feed namespace, the rest is the
    feed name; ``feed_parameters`` are passed to the feed on creation.
"""

from __future__ import annotations

import json
from typing import Any

from whisk_compiler.host import CompilationError, Framework
from whisk_compiler.utils.serializers import build_fqn, serialize_parameters
from whisk_compiler.utils.validators import (
    ValidationError,
    validate_descriptor,
    validate_parameters,
)


class CompileTriggers:
    """Compiles manifest and event triggers into ``service.triggers``."""

    def __init__(self, framework: Framework, options: dict[str, Any]):
        self.framework = framework
        self.options = options

        self.hooks = {
            'before:package:compileEvents': self.prepare,
            'package:compileEvents': self.compile_triggers,
        }

    def prepare(self) -> None:
        self.setup()
        self.merge_event_triggers()

    def setup(self) -> None:
        # Passed directly to the OpenWhisk deploy client
        self.framework.service.triggers = {}

    def merge_event_triggers(self) -> None:
        """Ensure every trigger referenced by an event has a manifest entry."""
        triggers = self.get_event_triggers()
        if not triggers:
            return

        service = self.framework.service
        if not service.resources:
            service.resources = {}

        if not service.resources.get('triggers'):
            service.resources['triggers'] = {}

        manifest_triggers = service.resources['triggers']
        for trigger in triggers:
            manifest_triggers[trigger] = manifest_triggers.get(trigger) or {}

    def get_event_triggers(self) -> list[str]:
        """Collect trigger names referenced by function events.

        Trigger objects without a ``name`` are skipped here; the rule
        compiler reports them.
        """
        service = self.framework.service
        event_triggers: dict[str, None] = {}

        for name in service.get_all_functions():
            func = service.get_function(name)
            events = func.get('events') or []
            if not isinstance(events, list):
                raise ValidationError(f'Function {name} events must be a list', field='events')
            for event in events:
                if not isinstance(event, dict) or 'trigger' not in event:
                    continue
                trigger = event['trigger']
                if isinstance(trigger, dict):
                    trigger = trigger.get('name')
                if trigger and isinstance(trigger, str):
                    event_triggers[trigger] = None

        return list(event_triggers)

    def compile_feed(self, name: str, namespace: str, params: dict[str, Any]) -> dict[str, Any]:
        """Compile the feed section of a trigger.

        Raises:
            ValidationError: If the feed path lacks a namespace or feed name.
        """
        feed = params['feed']
        parts = [part for part in feed.split('/') if part] if isinstance(feed, str) else []
        if len(parts) < 2:
            raise ValidationError(
                f'Invalid feed for Trigger {name}: {params["feed"]} '
                '(expected /namespace/[package/]feed)',
                field='feed',
            )

        return {
            'feedName': '/'.join(parts[1:]),
            'namespace': parts[0],
            'trigger': build_fqn(namespace, None, name),
            'params': params.get('feed_parameters') or {},
        }

    def compile_trigger(self, name: str, params: dict[str, Any]) -> dict[str, Any]:
        """Compile a single trigger descriptor.

        Args:
            name: Trigger name.
            params: Trigger entry from ``resources.triggers``.

        Returns:
            Trigger descriptor for the deploy client.
        """
        provider = self.framework.service.provider
        trigger: dict[str, Any] = {'triggerName': name, 'overwrite': True}

        trigger['namespace'] = params.get('namespace') or provider.get('namespace')

        if 'overwrite' in params:
            trigger['overwrite'] = params['overwrite']
        elif 'overwrite' in provider:
            trigger['overwrite'] = provider['overwrite']

        if params.get('parameters'):
            validate_parameters(params['parameters'], field=f'triggers.{name}.parameters')
            trigger['trigger'] = {
                'parameters': serialize_parameters(params['parameters']),
            }

        validate_descriptor(trigger, 'triggerName')

        if params.get('feed'):
            validate_parameters(
                params.get('feed_parameters'), field=f'triggers.{name}.feed_parameters'
            )
            trigger['feed'] = self.compile_feed(name, trigger['namespace'], params)

        if self.options.get('verbose'):
            self.framework.cli.log(f'Compiled Trigger ({name}): {json.dumps(trigger)}')

        return trigger

    def compile_triggers(self) -> None:
        """Compile every manifest trigger into ``service.triggers``.

        Raises:
            CompilationError: If the triggers output section is missing.
        """
        self.framework.cli.log('Compiling Triggers...')

        service = self.framework.service
        manifest_resources = service.resources
        ow_triggers = service.triggers

        if ow_triggers is None:
            raise CompilationError(
                'Missing Triggers section from OpenWhisk Resource Manager template'
            )

        if manifest_resources and manifest_resources.get('triggers'):
            for name, params in manifest_resources['triggers'].items():
                ow_triggers[name] = self.compile_trigger(name, params or {})
