"""
Pytest configuration and fixtures for djust-datastar tests.
"""

from unittest.mock import MagicMock

import pytest

from djust_datastar import Datastar, QueueConnection, reset_datastar
from djust_datastar.config import config


@pytest.fixture
def connection():
    """A single open in-process connection."""
    return QueueConnection(name="client-1")


@pytest.fixture
def make_connections():
    """Create ``n`` open in-process connections."""

    def _make(n):
        return [QueueConnection(name=f"client-{i + 1}") for i in range(n)]

    return _make


@pytest.fixture
def renderer():
    """Template renderer stub returning a fixed multi-line fragment."""
    render = MagicMock(name="render")
    render.return_value = '<div id="card">\n    <span>42</span>\n</div>\n'
    return render


@pytest.fixture
def message_source():
    """Message source stub that echoes key and locale."""
    return MagicMock(
        name="message_source",
        spec=[],
        side_effect=lambda key, locale: f"{key}[{locale}]",
    )


@pytest.fixture
def datastar(renderer, message_source):
    """Datastar factory wired to stub collaborators."""
    return Datastar(
        template_renderer=renderer,
        message_source=message_source,
        template_suffix=".html",
        default_locale="en",
    )


@pytest.fixture(autouse=True)
def reset_global_state():
    """Start every test from the settings-derived configuration."""
    config.reset()
    reset_datastar()
    yield
    config.reset()
    reset_datastar()
