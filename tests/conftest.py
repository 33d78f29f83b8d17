"""
Shared pytest fixtures for the shlack client test suite.

This file contains fixtures that are available to all test files.
"""
import io
import json
import asyncio

import pytest
from unittest.mock import Mock, AsyncMock
from blessed import Terminal

from shlack.session import SessionState
from terminal.console import Console


class QueuedLines:
    """Input source fed by the test instead of a keyboard.

    Lines passed to the constructor are available immediately, more can
    be added with feed(). None means end of input.
    """

    def __init__(self, *lines):
        self._pending = list(lines)
        self._queue = None

    @property
    def queue(self):
        # Created lazily so it binds to the running event loop
        if self._queue is None:
            self._queue = asyncio.Queue()
            for line in self._pending:
                self._queue.put_nowait(line)
        return self._queue

    def feed(self, line):
        self.queue.put_nowait(line)

    async def readline(self):
        return await self.queue.get()


async def block_forever(*args, **kwargs):
    """Coroutine that only ends by cancellation."""
    await asyncio.Event().wait()


@pytest.fixture
def sample_config():
    """
    Sample client configuration for testing.

    Returns:
        dict: Configuration with every key get_config fills in
    """
    return {
        'host': '127.0.0.1',
        'port': 4040,
        'username': None,
        'default_channel': 'lobby',
        'divider_length': 35,
        'log_level': 'warning',
        'log_file': None,
        'log_format': '%(levelname)s %(message)s',
        'colors': {}
    }


@pytest.fixture
def temp_config_file(tmp_path, sample_config):
    """
    Create temporary config file for testing.

    Returns:
        Path: Path to temporary config.json file
    """
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps(sample_config, indent=2))
    return config_file


@pytest.fixture
def session_state():
    """Session state starting in the lobby."""
    return SessionState('lobby')


@pytest.fixture
def output():
    """Buffer that receives everything the console writes."""
    return io.StringIO()


@pytest.fixture
def console(output):
    """
    Real Console writing to a buffer.

    The terminal is not a tty, so blessed emits no escape sequences and
    the buffer holds plain text.
    """
    return Console(term=Terminal(stream=output))


@pytest.fixture
def mock_console():
    """
    Mock Console.

    Returns:
        Mock: Console with every render method mocked
    """
    return Mock(spec=Console)


@pytest.fixture
def mock_connection():
    """
    Mock server connection.

    recv blocks until cancelled unless a test sets side_effect.

    Returns:
        Mock: Connection with async send/recv/close
    """
    connection = Mock()
    connection.send = AsyncMock()
    connection.recv = AsyncMock(side_effect=block_forever)
    connection.close = AsyncMock()
    return connection


@pytest.fixture
def queued_lines():
    """Empty input source; tests feed lines as needed."""
    return QueuedLines()


@pytest.fixture
def make_lines():
    """Factory for input sources with scripted lines."""
    return QueuedLines


@pytest.fixture
def eventually():
    """
    Wait until a condition holds.

    Returns:
        Coroutine function (predicate, timeout=2.0) raising
        AssertionError when the condition never holds
    """
    async def wait(predicate, timeout=2.0):
        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout
        while not predicate():
            if loop.time() > deadline:
                raise AssertionError('condition not met within %ss' % timeout)
            await asyncio.sleep(0.01)
    return wait


# Pytest configuration helpers


def pytest_configure(config):
    """
    Pytest configuration hook.

    Registers custom markers.
    """
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")
