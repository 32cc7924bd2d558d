"""Error types raised and logged by the hub."""
from __future__ import annotations


class HubError(Exception):
    """Base class for hub errors."""


class BindError(HubError):
    """The listening socket could not be bound."""

    def __init__(self, host: str, port: int, reason: OSError) -> None:
        self.host = host
        self.port = port
        self.reason = reason
        super().__init__(f"cannot listen on {host}:{port}: {reason}")


class AcceptError(HubError):
    """A WebSocket upgrade failed before the client was registered."""

    def __init__(self, address: str, reason: BaseException) -> None:
        self.address = address
        self.reason = reason
        super().__init__(f"upgrade from {address} failed: {reason!r}")


class SendError(HubError):
    """Delivering a broadcast to one client failed."""

    def __init__(self, address: str, reason: BaseException) -> None:
        self.address = address
        self.reason = reason
        super().__init__(f"send to {address} failed: {reason!r}")
