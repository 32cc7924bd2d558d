"""Connection records and the registry of live clients."""
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Iterator, List, Set


class ConnectionState(str, enum.Enum):
    CONNECTING = "connecting"
    CONNECTED = "connected"
    CLOSED = "closed"


@dataclass(eq=False)
class Connection:
    """One accepted WebSocket client.

    ``eq=False`` keeps the default identity-based ``__eq__`` and ``__hash__``,
    so two connections from the same address never collide in the registry.
    """

    ws: Any
    address: str
    state: ConnectionState = field(default=ConnectionState.CONNECTING)

    @classmethod
    def from_websocket(cls, ws: Any) -> "Connection":
        client = getattr(ws, "client", None)
        host = getattr(client, "host", None) if client is not None else None
        return cls(ws=ws, address=host or "unknown")


class ClientRegistry:
    """Set of currently connected clients, keyed by connection identity."""

    def __init__(self) -> None:
        self._members: Set[Connection] = set()

    def add(self, conn: Connection) -> None:
        self._members.add(conn)

    def discard(self, conn: Connection) -> bool:
        """Remove ``conn``; return False if it was not registered."""
        if conn not in self._members:
            return False
        self._members.remove(conn)
        return True

    def snapshot(self) -> List[Connection]:
        return list(self._members)

    def __contains__(self, conn: object) -> bool:
        return conn in self._members

    def __len__(self) -> int:
        return len(self._members)

    def __iter__(self) -> Iterator[Connection]:
        return iter(self.snapshot())
