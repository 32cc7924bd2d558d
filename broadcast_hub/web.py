"""WebSocket route serving the broadcast hub."""
from __future__ import annotations

import asyncio
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from broadcast_hub.hub import Hub
from broadcast_hub.registry import ConnectionState

router = APIRouter()
logger = logging.getLogger(__name__)


@router.websocket("/{path:path}")
async def ws_endpoint(ws: WebSocket, path: str = ""):
    hub: Hub = ws.app.state.hub
    idle_timeout: float = ws.app.state.settings.IDLE_TIMEOUT
    conn = await hub.accept(ws)
    if conn is None:
        return
    try:
        while True:
            if idle_timeout > 0:
                try:
                    message = await asyncio.wait_for(ws.receive(), idle_timeout)
                except asyncio.TimeoutError:
                    logger.warning("closing idle connection %s after %ss", conn.address, idle_timeout)
                    await ws.close(code=1000)
                    break
            else:
                message = await ws.receive()
            if message["type"] == "websocket.disconnect":
                break
            payload = message.get("text")
            if payload is None:
                payload = message.get("bytes") or b""
            await hub.on_message(conn, payload)
            if conn.state is not ConnectionState.CONNECTED:
                break
    except WebSocketDisconnect:
        pass
    except Exception as exc:
        hub.on_error(conn, exc)
    finally:
        hub.on_close(conn)
