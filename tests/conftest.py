"""Shared pytest configuration and fixtures."""

import asyncio
import shutil
import tempfile
from pathlib import Path
from typing import List, Optional

import pytest
import pytest_asyncio

from pdns_monitor.services.accumulator import MemoryAccumulator
from pdns_monitor.utils.logger import setup_logger


class FakeControlSocket:
    """
    Minimal stand-in for a PowerDNS control socket.

    Reads the command line, then either writes ``reply`` and closes the
    stream, or (with ``reply=None``) holds the connection open without
    answering until the server is stopped.
    """

    def __init__(self, path: str, reply: Optional[bytes] = None):
        self.path = path
        self.reply = reply
        self.commands: List[bytes] = []
        self._server = None
        self._release = asyncio.Event()

    async def start(self) -> "FakeControlSocket":
        self._server = await asyncio.start_unix_server(self._handle_client, path=self.path)
        return self

    async def stop(self) -> None:
        self._release.set()
        self._server.close()
        await self._server.wait_closed()

    async def _handle_client(self, reader, writer):
        self.commands.append(await reader.readline())
        try:
            if self.reply is None:
                await self._release.wait()
            else:
                writer.write(self.reply)
                await writer.drain()
        finally:
            writer.close()
            try:
                await writer.wait_closed()
            except ConnectionError:
                pass


@pytest.fixture
def socket_dir():
    """Short temp directory; unix socket paths are limited to ~100 bytes."""
    path = tempfile.mkdtemp(prefix="pdns")
    yield Path(path)
    shutil.rmtree(path, ignore_errors=True)


@pytest_asyncio.fixture
async def control_socket(socket_dir):
    """Factory starting fake control sockets inside ``socket_dir``."""
    servers = []

    async def start(reply: Optional[bytes] = None, name: str = "pdns.controlsocket"):
        server = await FakeControlSocket(str(socket_dir / name), reply).start()
        servers.append(server)
        return server

    yield start

    for server in servers:
        await server.stop()


@pytest.fixture
def logger():
    """Create logger for tests."""
    return setup_logger("test", "DEBUG")


@pytest.fixture
def accumulator():
    """In-memory measurement sink."""
    return MemoryAccumulator()
