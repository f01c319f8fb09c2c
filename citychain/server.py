"""A TCP server that hands every accepted connection to its own thread."""

from __future__ import annotations

import logging
import socket
import threading
from typing import Callable, Optional, Union

log = logging.getLogger(__name__)

SERVER_BACKLOG = 10
"""Backlog passed to ``listen``."""


class ServerError(OSError):
    """Raised when the server cannot be started."""


def start_server(port: Union[int, str], host: Optional[str] = None) -> socket.socket:
    """Bind an IPv4 TCP socket to ``port`` and start listening on it.

    With no ``host`` the socket is bound to every local address.
    Returns the listening socket; raises :class:`ServerError` on failure.
    """
    try:
        candidates = socket.getaddrinfo(
            host, str(port), socket.AF_INET, socket.SOCK_STREAM, 0, socket.AI_PASSIVE
        )
    except socket.gaierror as exc:
        raise ServerError(f"server start: addrinfo: {exc}") from exc

    listener: Optional[socket.socket] = None
    for family, socktype, _proto, _canonname, address in candidates:
        try:
            sock = socket.socket(family, socktype)
        except OSError as exc:
            log.error("server start: socket: %s", exc)
            continue
        try:
            sock.bind(address)
        except OSError as exc:
            log.error("server start: bind: %s", exc)
            sock.close()
            continue
        listener = sock
        break

    if listener is None:
        raise ServerError("server start: failed to bind")

    try:
        listener.listen(SERVER_BACKLOG)
    except OSError as exc:
        listener.close()
        raise ServerError(f"server start: listen: {exc}") from exc
    return listener


def serve(
    port: Union[int, str],
    on_connection: Callable[[socket.socket], object],
    host: Optional[str] = None,
) -> None:
    """Listen on ``port`` and call ``on_connection`` in a new thread per client.

    Runs until the listening socket is closed. Raises :class:`ServerError`
    if the server cannot be started.
    """
    listener = start_server(port, host)
    log.info("server: Listening on %s", port)

    with listener:
        while True:
            try:
                conn, _address = listener.accept()
            except OSError as exc:
                if listener.fileno() == -1:
                    break
                log.error("server: accept: %s", exc)
                continue

            log.info("server: New connection: %d", conn.fileno())
            thread = threading.Thread(target=on_connection, args=(conn,), daemon=True)
            thread.start()