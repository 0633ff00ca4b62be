"""Pytest configuration and fixtures for PenguinWhisk Manifest Compiler tests."""

from __future__ import annotations

from typing import Generator

import pytest
from flask import Flask

from whisk_compiler import create_app
from whisk_compiler.config import TestingConfig
from whisk_compiler.host import Framework, Service
from whisk_compiler.plugins import CompilePackages, CompileRules, CompileTriggers


@pytest.fixture
def app() -> Flask:
    """Create and configure a test Flask application.

    Returns:
        Flask application configured for testing.
    """
    app = create_app(TestingConfig)
    return app


@pytest.fixture
def client(app: Flask):
    """Create a test client for the Flask application.

    Args:
        app: Flask application fixture.

    Returns:
        Flask test client.
    """
    return app.test_client()


@pytest.fixture
def app_context(app: Flask) -> Generator:
    """Provide an application context for tests.

    Args:
        app: Flask application fixture.

    Yields:
        Application context.
    """
    with app.app_context():
        yield app


@pytest.fixture
def framework() -> Framework:
    """Host framework with an empty service named ``serviceName``.

    Returns:
        Framework whose provider namespace is ``testing``.
    """
    service = Service(service='serviceName', provider={'namespace': 'testing'})
    return Framework(service=service)


@pytest.fixture
def options() -> dict:
    return {'stage': 'dev', 'region': 'us-east-1'}


@pytest.fixture
def compile_packages(framework: Framework, options: dict) -> CompilePackages:
    plugin = CompilePackages(framework, options)
    plugin.setup()
    return plugin


@pytest.fixture
def compile_rules(framework: Framework, options: dict) -> CompileRules:
    plugin = CompileRules(framework, options)
    plugin.setup()
    return plugin


@pytest.fixture
def compile_triggers(framework: Framework, options: dict) -> CompileTriggers:
    plugin = CompileTriggers(framework, options)
    plugin.setup()
    return plugin
