"""Tests for the manifest compiler HTTP API."""

from __future__ import annotations

from unittest import mock

from whisk_compiler.host import CompilationError


class TestHealth:

    def test_health(self, client):
        response = client.get('/health')
        assert response.status_code == 200
        assert response.get_json() == {'status': 'healthy'}

    def test_v1_health(self, client):
        response = client.get('/api/v1/health')
        assert response.status_code == 200
        assert response.get_json() == {'status': 'healthy', 'version': 'v1'}

    def test_root(self, client):
        response = client.get('/')
        assert response.get_json()['endpoints']['compile'] == '/api/v1/compile'


class TestCompileEndpoint:

    def test_compile(self, client):
        manifest = {
            'service': 'svc',
            'functions': {
                'a': {'name': 'pkg/a', 'events': [{'trigger': 't'}]},
            },
        }

        response = client.post('/api/v1/compile', json=manifest)

        assert response.status_code == 200
        assert response.get_json() == {
            'packages': {
                'pkg': {'name': 'pkg', 'overwrite': True, 'namespace': 'testing'},
            },
            'triggers': {
                't': {'triggerName': 't', 'overwrite': True, 'namespace': 'testing'},
            },
            'rules': {
                'svc_t_to_a': {
                    'ruleName': 'svc_t_to_a',
                    'action': 'svc_a',
                    'trigger': 't',
                    'namespace': 'testing',
                    'overwrite': True,
                },
            },
        }

    def test_non_object_body(self, client):
        response = client.post('/api/v1/compile', json=['not', 'a', 'manifest'])
        assert response.status_code == 400
        assert response.get_json() == {'error': 'Request body must be a JSON object'}

    def test_invalid_json(self, client):
        response = client.post(
            '/api/v1/compile', data='{nope', content_type='application/json'
        )
        assert response.status_code == 400

    def test_missing_trigger_field(self, client):
        manifest = {
            'service': 'svc',
            'functions': {'a': {'events': [{'trigger': {'rule': 'r'}}]}},
        }

        response = client.post('/api/v1/compile', json=manifest)

        assert response.status_code == 400
        body = response.get_json()
        assert body['field'] == 'name'
        assert 'Missing mandatory name property' in body['error']

    def test_compilation_error(self, app, client):
        compiler = app.extensions['compiler']
        with mock.patch.object(
            compiler, 'compile', side_effect=CompilationError('Missing Rules section')
        ):
            response = client.post('/api/v1/compile', json={'service': 'svc'})

        assert response.status_code == 500
        assert response.get_json() == {'error': 'Missing Rules section', 'code': 500}

    def test_verbose_query(self, app, client):
        compiler = app.extensions['compiler']
        with mock.patch.object(
            compiler, 'compile', return_value={'packages': {}, 'triggers': {}, 'rules': {}}
        ) as stub:
            client.post('/api/v1/compile?verbose=true', json={'service': 'svc'})
            client.post('/api/v1/compile', json={'service': 'svc'})

        assert stub.call_args_list[0].kwargs == {'verbose': True}
        assert stub.call_args_list[1].kwargs == {'verbose': None}

    def test_malformed_package_entry(self, client):
        manifest = {'service': 'svc', 'resources': {'packages': {'p': 'oops'}}}

        response = client.post('/api/v1/compile', json=manifest)

        assert response.status_code == 400
        assert response.is_json
        assert response.get_json()['field'] == 'resources.packages.p'

    def test_malformed_events(self, client):
        manifest = {'service': 'svc', 'functions': {'a': {'events': 5}}}

        response = client.post('/api/v1/compile', json=manifest)

        assert response.status_code == 400
        assert response.get_json()['field'] == 'events'

    def test_unexpected_error(self, app, client):
        compiler = app.extensions['compiler']
        with mock.patch.object(compiler, 'compile', side_effect=RuntimeError('kaboom')):
            response = client.post('/api/v1/compile', json={'service': 'svc'})

        assert response.status_code == 500
        assert response.get_json() == {'error': 'An unexpected error occurred', 'code': 500}


class TestErrorHandlers:

    def test_unknown_api_path(self, client):
        response = client.get('/api/v1/nope')

        assert response.status_code == 404
        assert response.get_json() == {'error': 'Resource not found', 'code': 404}
