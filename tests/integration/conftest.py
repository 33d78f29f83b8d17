"""
Shared fixtures for integration tests.

Integration tests run a real client against a loopback TCP server that
records the frames it receives and lets the test send replies.
"""

import asyncio

import pytest


class ChatServer:
    """Minimal stand-in for a Shlack server.

    Accepts one client. Every received line is queued in `frames`,
    followed by None when the client disconnects.
    """

    def __init__(self):
        self.server = None
        self.writer = None
        self.frames = None
        self.connected = None
        self.host = None
        self.port = None

    async def start(self):
        self.frames = asyncio.Queue()
        self.connected = asyncio.Event()
        self.server = await asyncio.start_server(self._handle, '127.0.0.1', 0)
        self.host, self.port = self.server.sockets[0].getsockname()[:2]
        return self

    async def _handle(self, reader, writer):
        self.writer = writer
        self.connected.set()
        while True:
            try:
                data = await reader.readline()
            except ConnectionError:
                data = b''
            if not data:
                break
            await self.frames.put(data.decode('utf-8').rstrip('\n'))
        await self.frames.put(None)

    async def next_frame(self, timeout=2.0):
        """Next line from the client, or None once it disconnected."""
        return await asyncio.wait_for(self.frames.get(), timeout)

    async def send(self, line):
        await asyncio.wait_for(self.connected.wait(), 2.0)
        self.writer.write((line + '\n').encode('utf-8'))
        await self.writer.drain()

    async def disconnect(self):
        """Close the client connection from the server side."""
        self.writer.close()

    async def stop(self):
        if self.writer is not None:
            self.writer.close()
        if self.server is not None:
            self.server.close()
            await asyncio.wait_for(self.server.wait_closed(), 2.0)


@pytest.fixture
def chat_server():
    """Unstarted loopback server; tests await start() and stop()."""
    return ChatServer()


async def find_closed_port():
    server = await asyncio.start_server(lambda r, w: None, '127.0.0.1', 0)
    port = server.sockets[0].getsockname()[1]
    server.close()
    await server.wait_closed()
    return port


@pytest.fixture
def closed_port():
    """Coroutine function returning a port nothing listens on."""
    return find_closed_port
