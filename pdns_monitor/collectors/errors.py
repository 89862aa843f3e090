"""Exceptions raised by collectors during a gather pass."""

from typing import Optional


class CollectionError(Exception):
    """Base class for errors that abort a gather pass."""

    def __init__(self, message: str, target: Optional[str] = None):
        super().__init__(message)
        self.target = target


class SocketConnectionError(CollectionError, ConnectionError):
    """The control socket could not be reached or the connection was lost."""


class DeadlineExceededError(SocketConnectionError, TimeoutError):
    """The exchange did not finish before the deadline."""


class TransportError(CollectionError):
    """Writing the command or reading the reply failed."""


class ResponseTooLargeError(TransportError):
    """The peer sent more data than the response limit allows."""


class ParseError(CollectionError, ValueError):
    """The reply does not follow the key=value grammar."""
