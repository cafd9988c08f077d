"""
Pytest configuration and shared fixtures.
"""
import logging

import pytest
import structlog

from fakes import BASE_URL, FLAGS, PUBLIC_BASE_URL, FakeFeatureFlagServer
from flag_tenants.client.session_manager import SessionManager
from flag_tenants.config.config import Config, MonitoringConfig, ServiceConfig


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    structlog.reset_defaults()
    for handler in list(logging.root.handlers):
        logging.root.removeHandler(handler)


@pytest.fixture
def service_config() -> ServiceConfig:
    return ServiceConfig(base_url=BASE_URL, public_base_url=PUBLIC_BASE_URL, request_timeout_seconds=5)


@pytest.fixture
def config(service_config) -> Config:
    return Config(service=service_config, monitoring=MonitoringConfig(), dry_run=False)


@pytest.fixture
def server() -> FakeFeatureFlagServer:
    return FakeFeatureFlagServer(FLAGS)


@pytest.fixture
def sessions(service_config, server) -> SessionManager:
    return SessionManager(service_config, http=server)
