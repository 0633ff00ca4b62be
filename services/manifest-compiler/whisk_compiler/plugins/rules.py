"""
OpenWhisk Rule compiler plugin.

Rules connect triggers to actions. Every ``trigger`` entry in a function's
``events`` list compiles into one rule; other event kinds are skipped.

Trigger entry formats:
    - events:
        - trigger: my_trigger
        - trigger:
            name: my_trigger
            rule: my_rule
            overwrite: false

A bare string uses the derived rule name ``{service}_{trigger}_to_{function}``.
An object must declare both ``name`` and ``rule``.
"""

from __future__ import annotations

import json
from typing import Any

from whisk_compiler.host import CompilationError, Framework
from whisk_compiler.utils.validators import (
    ValidationError,
    require_property,
    validate_descriptor,
)


class CompileRules:
    """Compiles function trigger events into ``service.rules``."""

    def __init__(self, framework: Framework, options: dict[str, Any]):
        self.framework = framework
        self.options = options

        self.hooks = {
            'before:package:compileEvents': self.setup,
            'package:compileEvents': self.compile_rules,
        }

    def setup(self) -> None:
        # Passed directly to the OpenWhisk deploy client
        self.framework.service.rules = {}

    def compile_rule(
        self, func_name: str, func_obj: dict[str, Any], trigger: str | dict[str, Any]
    ) -> dict[str, Any]:
        """Compile the rule binding one trigger to one function.

        Args:
            func_name: Function key in the manifest.
            func_obj: Function object.
            trigger: Trigger event value, a name or a trigger object.

        Returns:
            Rule descriptor for the deploy client.

        Raises:
            ValidationError: If a trigger object lacks ``name`` or ``rule``,
                or the rule would bind an empty trigger name.
        """
        service = self.framework.service
        service_name = service.service
        provider = service.provider

        rule: dict[str, Any] = {}

        if isinstance(trigger, str):
            rule['ruleName'] = f'{service_name}_{trigger}_to_{func_name}'
            trigger_name = trigger
            trigger = {}
        elif isinstance(trigger, dict):
            owner = f'Event Trigger definition for Function: {func_name}'
            trigger_name = require_property(trigger, 'name', owner)
            rule['ruleName'] = require_property(trigger, 'rule', owner)
        else:
            raise ValidationError(
                f'Invalid Event Trigger definition for Function: {func_name}',
                field='trigger',
            )

        rule['action'] = f'{service_name}_{func_name}'
        rule['trigger'] = trigger_name
        rule['namespace'] = (
            trigger.get('namespace')
            or func_obj.get('namespace')
            or provider.get('namespace')
        )

        if 'overwrite' in trigger:
            rule['overwrite'] = trigger['overwrite']
        elif 'overwrite' in provider:
            rule['overwrite'] = provider['overwrite']
        else:
            rule['overwrite'] = True

        validate_descriptor(rule, 'ruleName')
        validate_descriptor(rule, 'trigger')

        if self.options.get('verbose'):
            self.framework.cli.log(
                f'Compiled Rule ({rule["ruleName"]}): {json.dumps(rule)}'
            )

        return rule

    def compile_function_rules(
        self, func_name: str, func_obj: dict[str, Any]
    ) -> list[dict[str, Any]]:
        """Compile one rule per trigger event of a function.

        Args:
            func_name: Function key in the manifest.
            func_obj: Function object.

        Returns:
            Rule descriptors in event order, empty when no trigger events.

        Raises:
            ValidationError: If ``events`` is not a list.
        """
        events = func_obj.get('events') or []
        if not isinstance(events, list):
            raise ValidationError(
                f'Function {func_name} events must be a list', field='events'
            )
        return [
            self.compile_rule(func_name, func_obj, event['trigger'])
            for event in events
            if isinstance(event, dict) and 'trigger' in event
        ]

    def compile_rules(self) -> None:
        """Compile the rules of every function into ``service.rules``.

        Raises:
            CompilationError: If the rules output section is missing.
        """
        self.framework.cli.log('Compiling Rules...')

        service = self.framework.service
        ow_rules = service.rules

        if ow_rules is None:
            raise CompilationError(
                'Missing Rules section from OpenWhisk Resource Manager template'
            )

        for name in service.get_all_functions():
            func = service.get_function(name)
            for rule in self.compile_function_rules(name, func):
                ow_rules[rule['ruleName']] = rule
