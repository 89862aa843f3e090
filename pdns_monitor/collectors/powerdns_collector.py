"""PowerDNS statistics collector via the local control socket."""

import asyncio
import logging
import re
from typing import Dict, List, Optional

from ..config.models import PowerDNSConfig
from ..services.accumulator import Accumulator
from .base import BaseCollector
from .errors import (
    CollectionError,
    DeadlineExceededError,
    ParseError,
    ResponseTooLargeError,
    SocketConnectionError,
    TransportError,
)
from .registry import InputRegistry

MEASUREMENT = "powerdns"
DEFAULT_SOCKET = "/var/run/pdns.controlsocket"
DEFAULT_TIMEOUT = 5.0
DEFAULT_MAX_RESPONSE_BYTES = 1024 * 1024
COMMAND = b"show * \n"
READ_CHUNK = 4096

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1
_INTEGER = re.compile(r"[+-]?[0-9]+")

SAMPLE_CONFIG = """
  # An array of sockets to gather stats about.
  # Specify a path to unix socket.
  #
  # If no servers are specified, then '/var/run/pdns.controlsocket' is used as the path.
  unix_sockets: ["/var/run/pdns.controlsocket"]
"""


def parse_response(text: str) -> Dict[str, int]:
    """
    Decode a ``show *`` reply into a field set.

    The reply is a list of ``name=value`` segments, each terminated by a
    comma. Whatever follows the last comma (normally a newline) is not a
    field and is dropped.

    Args:
        text: Decoded reply from the control socket

    Returns:
        Dict[str, int]: Field name to value

    Raises:
        ParseError: If any segment is malformed. Nothing is returned in that
            case, even for segments that decoded cleanly.

    Example:
        >>> parse_response("questions=42,answers=41,\\n")
        {'questions': 42, 'answers': 41}
    """
    segments = text.split(",")
    trailing = segments.pop()
    if trailing.strip():
        raise ParseError(f"Unterminated field at end of reply: {trailing[:100]!r}")

    fields: Dict[str, int] = {}
    for segment in segments:
        name, sep, raw_value = segment.partition("=")
        if not sep:
            raise ParseError(f"Missing '=' in field {segment[:100]!r}")
        if name in fields:
            raise ParseError(f"Duplicate field {name!r}")
        fields[name] = _parse_int64(name, raw_value)

    return fields


def _parse_int64(name: str, raw_value: str) -> int:
    """Parse a base-10 signed 64-bit integer, no whitespace or separators."""
    if not _INTEGER.fullmatch(raw_value):
        raise ParseError(f"Field {name!r} has non-integer value {raw_value[:100]!r}")

    value = int(raw_value)
    if not INT64_MIN <= value <= INT64_MAX:
        raise ParseError(f"Field {name!r} value {raw_value} is out of 64-bit range")
    return value


class PowerDNSCollector(BaseCollector):
    """Collector for PowerDNS server statistics over unix control sockets."""

    def __init__(
        self,
        config: Optional[PowerDNSConfig],
        logger: logging.Logger,
        timeout: float = DEFAULT_TIMEOUT,
        max_response_bytes: int = DEFAULT_MAX_RESPONSE_BYTES
    ):
        """
        Initialize PowerDNS collector.

        Args:
            config: Input configuration; None behaves like an empty socket list
            logger: Logger instance
            timeout: Seconds allowed for connecting, and separately for the
                whole command/reply exchange
            max_response_bytes: Largest reply accepted before the read aborts
        """
        super().__init__(config or PowerDNSConfig(), logger)
        self.timeout = timeout
        self.max_response_bytes = max_response_bytes

    def description(self) -> str:
        return "Read metrics from one or many PowerDNS servers"

    def sample_config(self) -> str:
        return SAMPLE_CONFIG

    @property
    def targets(self) -> List[str]:
        """Socket paths queried by a gather pass, in order."""
        return list(self.config.unix_sockets) or [DEFAULT_SOCKET]

    async def gather(self, acc: Accumulator) -> None:
        """
        Query every configured socket in order and emit one measurement each.

        The pass is fail-fast: the first target that fails aborts the pass
        and its error is raised with ``target`` set. Targets after it are not
        queried, and measurements already emitted for earlier targets stay
        in the accumulator.

        Args:
            acc: Sink receiving one ``powerdns`` measurement per target

        Raises:
            CollectionError: From the first failing target
        """
        targets = self.targets
        self.logger.info(f"Gathering stats from {len(targets)} PowerDNS socket(s)")

        for address in targets:
            try:
                fields = await self.gather_server(address)
            except CollectionError as e:
                if e.target is None:
                    e.target = address
                self.logger.error(
                    f"Gather failed for {address}: {e}",
                    extra={"server": address, "error_type": type(e).__name__}
                )
                raise

            acc.add_fields(MEASUREMENT, fields, {"server": address})

    async def gather_server(self, address: str) -> Dict[str, int]:
        """
        Run the ``show *`` exchange against one control socket.

        Args:
            address: Filesystem path of the unix control socket

        Returns:
            Dict[str, int]: Parsed statistics

        Raises:
            SocketConnectionError: Connect failed or timed out
            DeadlineExceededError: Exchange did not finish in time
            TransportError: Write or read failed
            ResponseTooLargeError: Reply exceeded ``max_response_bytes``
            ParseError: Reply was malformed
        """
        self.logger.debug(f"Connecting to {address}")
        try:
            reader, writer = await asyncio.wait_for(
                asyncio.open_unix_connection(address),
                timeout=self.timeout
            )
        except asyncio.TimeoutError:
            raise DeadlineExceededError(
                f"Timed out connecting to {address} after {self.timeout}s", target=address
            ) from None
        except OSError as e:
            raise SocketConnectionError(f"Cannot connect to {address}: {e}", target=address) from e

        try:
            # One deadline covers the write and the whole read phase
            raw = await asyncio.wait_for(self._exchange(reader, writer, address), timeout=self.timeout)
        except asyncio.TimeoutError:
            raise DeadlineExceededError(
                f"No complete reply from {address} within {self.timeout}s", target=address
            ) from None
        finally:
            await self._close(writer)

        self.logger.debug(f"Received {len(raw)} bytes from {address}")
        return parse_response(raw.decode("utf-8", errors="replace"))

    async def _exchange(
        self,
        reader: asyncio.StreamReader,
        writer: asyncio.StreamWriter,
        address: str
    ) -> bytes:
        """Send the command, then read until the peer closes the stream."""
        try:
            writer.write(COMMAND)
            await writer.drain()
        except OSError as e:
            raise TransportError(f"Failed to send command to {address}: {e}", target=address) from e

        buf = bytearray()
        while True:
            try:
                chunk = await reader.read(READ_CHUNK)
            except OSError as e:
                raise TransportError(f"Failed reading from {address}: {e}", target=address) from e

            if not chunk:
                break

            buf.extend(chunk)
            if len(buf) > self.max_response_bytes:
                raise ResponseTooLargeError(
                    f"Reply from {address} exceeds {self.max_response_bytes} bytes", target=address
                )

        return bytes(buf)

    async def _close(self, writer: asyncio.StreamWriter) -> None:
        """Close the connection, logging rather than raising on teardown errors."""
        writer.close()
        try:
            await writer.wait_closed()
        except OSError as e:
            self.logger.warning(f"Error closing control socket connection: {e}")


def register(registry: InputRegistry) -> None:
    """Add the ``powerdns`` input to ``registry``."""
    registry.add(MEASUREMENT, lambda config, logger: PowerDNSCollector(config, logger))
