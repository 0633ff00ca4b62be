"""Flask configuration management for PenguinWhisk Manifest Compiler."""

from __future__ import annotations

import os


class Config:
    """Base configuration class loading from environment variables."""

    # Flask settings
    DEBUG = os.getenv("FLASK_DEBUG", "False").lower() == "true"
    TESTING = os.getenv("FLASK_TESTING", "False").lower() == "true"
    ENV = os.getenv("FLASK_ENV", "production")
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key-change-in-production")

    # Largest manifest accepted by the compile endpoint
    MAX_CONTENT_LENGTH = int(os.getenv("MAX_MANIFEST_SIZE", str(4 * 1024 * 1024)))

    # OpenWhisk provider defaults
    # "_" is the OpenWhisk alias for the caller's default namespace
    WHISK_NAMESPACE = os.getenv("WHISK_NAMESPACE", "_")

    # Compiler configuration
    COMPILE_VERBOSE = os.getenv("COMPILE_VERBOSE", "False").lower() == "true"

    # Logging configuration
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


class DevelopmentConfig(Config):
    """Development environment configuration."""

    DEBUG = True
    TESTING = False
    ENV = "development"
    COMPILE_VERBOSE = True
    LOG_LEVEL = "DEBUG"


class TestingConfig(Config):
    """Testing environment configuration."""

    DEBUG = True
    TESTING = True
    ENV = "testing"
    SECRET_KEY = "test-secret-key"
    WHISK_NAMESPACE = "testing"
    COMPILE_VERBOSE = False


class ProductionConfig(Config):
    """Production environment configuration."""

    DEBUG = False
    TESTING = False
    ENV = "production"
