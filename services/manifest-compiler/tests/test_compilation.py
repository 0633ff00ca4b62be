"""Tests for the compilation service."""

from __future__ import annotations

import copy
import json

import pytest

from whisk_compiler.host import CompilationError
from whisk_compiler.services.compilation import CompilationService
from whisk_compiler.utils.validators import ValidationError

MANIFEST = {
    'service': 'svc',
    'provider': {'namespace': 'ns'},
    'functions': {
        'a': {
            'name': 'utils/a',
            'events': [{'trigger': 't'}, {'http': 'GET /a'}],
        },
        'b': {
            'name': 'b',
            'namespace': 'b_ns',
            'events': [{'trigger': {'name': 'alarm', 'rule': 'b_on_alarm', 'overwrite': False}}],
        },
    },
    'resources': {
        'packages': {'shared': {'parameters': {'region': 'eu'}}},
        'triggers': {'alarm': {'feed': '/whisk.system/alarms/alarm', 'feed_parameters': {'cron': '* * * * *'}}},
    },
}


class MissingRulesPlugin:

    def __init__(self, framework, options):
        self.framework = framework
        self.hooks = {'before:package:compileEvents': self.clear}

    def clear(self):
        self.framework.service.rules = None


class TestCompilationService:

    def test_compile_manifest(self):
        result = CompilationService().compile(MANIFEST)

        assert result['packages'] == {
            'shared': {
                'name': 'shared',
                'overwrite': True,
                'namespace': 'ns',
                'package': {'parameters': [{'key': 'region', 'value': 'eu'}]},
            },
            'utils': {'name': 'utils', 'overwrite': True, 'namespace': 'ns'},
        }
        assert result['triggers'] == {
            'alarm': {
                'triggerName': 'alarm',
                'overwrite': True,
                'namespace': 'ns',
                'feed': {
                    'feedName': 'alarms/alarm',
                    'namespace': 'whisk.system',
                    'trigger': '/ns/alarm',
                    'params': {'cron': '* * * * *'},
                },
            },
            't': {'triggerName': 't', 'overwrite': True, 'namespace': 'ns'},
        }
        assert result['rules'] == {
            'svc_t_to_a': {
                'ruleName': 'svc_t_to_a',
                'action': 'svc_a',
                'trigger': 't',
                'namespace': 'ns',
                'overwrite': True,
            },
            'b_on_alarm': {
                'ruleName': 'b_on_alarm',
                'action': 'svc_b',
                'trigger': 'alarm',
                'namespace': 'b_ns',
                'overwrite': False,
            },
        }

    def test_manifest_not_mutated(self):
        manifest = copy.deepcopy(MANIFEST)
        CompilationService().compile(manifest)
        assert manifest == MANIFEST

    def test_compile_is_idempotent(self):
        compiler = CompilationService()
        first = json.dumps(compiler.compile(MANIFEST))
        second = json.dumps(compiler.compile(MANIFEST))
        assert first == second

    def test_default_namespace(self):
        manifest = {'service': 'svc', 'functions': {'a': {'events': [{'trigger': 't'}]}}}
        result = CompilationService(default_namespace='_').compile(manifest)
        assert result['rules']['svc_t_to_a']['namespace'] == '_'

    def test_no_triggers(self):
        manifest = {'service': 'svc', 'provider': {'namespace': 'ns'},
                    'functions': {'a': {'events': [{'api': {}}]}}}
        result = CompilationService().compile(manifest)
        assert result == {'packages': {}, 'triggers': {}, 'rules': {}}

    def test_missing_service_name(self):
        with pytest.raises(ValidationError) as excinfo:
            CompilationService().compile({'provider': {'namespace': 'ns'}})
        assert excinfo.value.field == 'service'

    def test_invalid_section(self):
        with pytest.raises(ValidationError) as excinfo:
            CompilationService().compile({'service': 'svc', 'functions': ['a']})
        assert excinfo.value.field == 'functions'

    def test_missing_trigger_field(self):
        manifest = {'service': 'svc', 'provider': {'namespace': 'ns'},
                    'functions': {'a': {'events': [{'trigger': {'name': 't'}}]}}}
        with pytest.raises(ValidationError, match='Missing mandatory rule property'):
            CompilationService().compile(manifest)

    def test_missing_output_section(self):
        # Registered last so its setup hook runs after the rule compiler's
        compiler = CompilationService(plugins=CompilationService().plugins + [MissingRulesPlugin])
        with pytest.raises(CompilationError, match='Missing Rules section'):
            compiler.compile(MANIFEST)

    @pytest.mark.parametrize('manifest, field', [
        ({'service': 'svc', 'resources': {'packages': {'p': 'oops'}}}, 'resources.packages.p'),
        ({'service': 'svc', 'resources': {'packages': ['p']}}, 'resources.packages'),
        ({'service': 'svc', 'resources': {'triggers': {'t': 5}}}, 'resources.triggers.t'),
        ({'service': 'svc', 'resources': {'triggers': 't'}}, 'resources.triggers'),
        ({'service': 'svc', 'functions': {'a': {'name': 123}}}, 'name'),
        ({'service': 'svc', 'functions': {'a': {'events': 5}}}, 'events'),
        ({'service': 'svc', 'functions': {'a': {'events': {'trigger': 't'}}}}, 'events'),
    ])
    def test_malformed_nested_sections(self, manifest, field):
        with pytest.raises(ValidationError) as excinfo:
            CompilationService(default_namespace='_').compile(manifest)
        assert excinfo.value.field == field

    def test_null_resource_entries_allowed(self):
        manifest = {'service': 'svc', 'provider': {'namespace': 'ns'},
                    'resources': {'packages': {'p': None}, 'triggers': None}}
        result = CompilationService().compile(manifest)
        assert result['packages'] == {'p': {'name': 'p', 'overwrite': True, 'namespace': 'ns'}}
        assert result['triggers'] == {}
