#!/usr/bin/env python
"""Application entry point."""
import logging
import socket
import sys

import uvicorn

from broadcast_hub.app_factory import create_app
from broadcast_hub.errors import BindError
from broadcast_hub.settings import settings


def socket_family(host: str) -> socket.AddressFamily:
    return socket.AF_INET6 if host and ":" in host else socket.AF_INET


def bind_listener(host: str, port: int) -> socket.socket:
    """Bind the listening socket up front so a busy port fails loudly."""
    sock = socket.socket(socket_family(host), socket.SOCK_STREAM)
    sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
    try:
        sock.bind((host, port))
    except OSError as exc:
        sock.close()
        raise BindError(host, port, exc) from exc
    sock.set_inheritable(True)
    return sock


def main() -> None:
    logging.basicConfig(level=settings.LOG_LEVEL.upper())
    try:
        sock = bind_listener(settings.HUB_HOST, settings.HUB_PORT)
    except BindError as exc:
        logging.error("Server failed to start: %s", exc)
        sys.exit(1)

    logging.info("Broadcast hub on ws://%s:%s/", settings.HUB_HOST, settings.HUB_PORT)
    config = uvicorn.Config(create_app(settings), log_level=settings.LOG_LEVEL.lower())
    server = uvicorn.Server(config)
    try:
        server.run(sockets=[sock])
    finally:
        sock.close()


if __name__ == "__main__":
    main()
