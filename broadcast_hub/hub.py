"""WebSocket hub relaying every client message to all connected clients."""
from __future__ import annotations

import asyncio
import logging
from typing import Any, List, Optional, Tuple, Union

from broadcast_hub.errors import AcceptError, SendError
from broadcast_hub.registry import ClientRegistry, Connection, ConnectionState

logger = logging.getLogger(__name__)


def format_record(address: str, payload: Union[str, bytes]) -> str:
    """Label a payload with the sender's address: ``"<address>: <payload>"``."""
    if isinstance(payload, (bytes, bytearray)):
        payload = bytes(payload).decode("utf-8", errors="replace")
    return f"{address}: {payload}"


class Hub:
    """Tracks active WebSocket connections and fans out labeled messages."""

    def __init__(self, include_sender: bool = True) -> None:
        self.include_sender = include_sender
        self.registry = ClientRegistry()
        # One fan-out at a time keeps per-client delivery in acceptance order.
        self._fanout = asyncio.Lock()

    async def accept(self, ws: Any) -> Optional[Connection]:
        conn = Connection.from_websocket(ws)
        try:
            await ws.accept()
        except Exception as exc:
            conn.state = ConnectionState.CLOSED
            logger.warning("%s", AcceptError(conn.address, exc))
            return None
        conn.state = ConnectionState.CONNECTED
        self.registry.add(conn)
        logger.info("connection established: %s (%d connected)", conn.address, len(self.registry))
        return conn

    async def on_message(self, conn: Connection, payload: Union[str, bytes]) -> int:
        if conn.state is not ConnectionState.CONNECTED:
            # Already dropped; its frames are no longer relayed
            return 0
        record = format_record(conn.address, payload)
        logger.info("%s", record)
        return await self.broadcast(record, sender=conn)

    async def broadcast(self, record: str, sender: Optional[Connection] = None) -> int:
        """Send ``record`` as a JSON string to every registered client.

        Returns the number of clients the record was delivered to. Clients
        whose send fails are dropped from the registry once the round is over.
        """
        delivered = 0
        dead: List[Tuple[Connection, SendError]] = []
        async with self._fanout:
            for conn in self.registry.snapshot():
                # An earlier send may have yielded to a close of this client
                if conn not in self.registry:
                    continue
                if sender is conn and not self.include_sender:
                    continue
                try:
                    await conn.ws.send_json(record)
                except Exception as exc:
                    dead.append((conn, SendError(conn.address, exc)))
                else:
                    delivered += 1
        for conn, err in dead:
            self.on_error(conn, err)
            await self._close_socket(conn, code=1011)
        return delivered

    def on_close(self, conn: Connection) -> None:
        conn.state = ConnectionState.CLOSED
        if self.registry.discard(conn):
            logger.info("connection closed: %s (%d connected)", conn.address, len(self.registry))

    def on_error(self, conn: Connection, exc: BaseException) -> None:
        if conn in self.registry:
            logger.warning("connection error: %s: %s", conn.address, exc)
        self.on_close(conn)

    async def close_all(self, code: int = 1001) -> None:
        for conn in self.registry.snapshot():
            await self._close_socket(conn, code=code)
            self.on_close(conn)

    async def _close_socket(self, conn: Connection, code: int) -> None:
        try:
            await conn.ws.close(code=code)
        except Exception as exc:
            logger.warning("closing %s failed: %r", conn.address, exc)
