"""Pytest configuration and fixtures."""

import io
import os

import pytest

from markup_persist.core import configure_logging, create_services, get_settings
from markup_persist.core.config import Settings
from markup_persist.markup import MarkupWriter
from markup_persist.persistence import ControlPersister


# ============================================================================
# Pytest Hooks
# ============================================================================

def pytest_configure(config):
    """Configure pytest with environment variables."""
    os.environ['MARKUP_LOG_LEVEL'] = 'WARNING'
    os.environ['MARKUP_JSON_LOGS'] = 'false'
    get_settings.cache_clear()
    configure_logging()


# ============================================================================
# Core Fixtures
# ============================================================================

@pytest.fixture
def settings():
    """Test settings."""
    return Settings()


@pytest.fixture
def persister(settings):
    """Persister using default test settings."""
    return ControlPersister(settings)


# ============================================================================
# Services Fixtures
# ============================================================================

@pytest.fixture
def services():
    """Services context with every type mapped to the asp prefix."""
    return create_services(default_prefix="asp")


@pytest.fixture
def services_without_events():
    """Services context that exposes no event bindings."""
    return create_services(default_prefix="asp", with_events=False)


@pytest.fixture
def bare_services():
    """Separate services context whose prefix table maps nothing."""
    return create_services()


# ============================================================================
# Writer Fixtures
# ============================================================================

@pytest.fixture
def sink():
    """In-memory text sink."""
    return io.StringIO()


@pytest.fixture
def writer(sink):
    """Markup writer over the in-memory sink."""
    return MarkupWriter(sink)
