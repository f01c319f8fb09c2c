"""Command-line client for the city chain game."""

from __future__ import annotations

import socket
import sys
from typing import Optional, Sequence, TextIO, Union

from citychain.protocol import (
    MAX_DATA_SIZE,
    MAX_MSG_SIZE,
    Command,
    ProtocolError,
    make_message,
    parse_message,
)


def _send_frame(sock: socket.socket, text: str) -> None:
    """Send ``text`` as one NUL-padded frame of ``MAX_MSG_SIZE`` bytes."""
    payload = text.encode("utf-8")
    if len(payload) >= MAX_MSG_SIZE:
        raise ProtocolError(f"message too long for one frame: {text!r}")
    sock.sendall(payload.ljust(MAX_MSG_SIZE, b"\0"))


def _recv_frame(sock: socket.socket) -> Optional[str]:
    """Receive one frame; ``None`` once the server has closed the connection."""
    frame = bytearray()
    while len(frame) < MAX_MSG_SIZE:
        chunk = sock.recv(MAX_MSG_SIZE - len(frame))
        if not chunk:
            return None
        frame += chunk
    return bytes(frame).split(b"\0", 1)[0].decode("utf-8", errors="replace")


def _fit_city(line: str) -> str:
    """Strip the line ending and shorten the city so its message fits a frame."""
    city = line.rstrip("\n")[: MAX_DATA_SIZE - 2]
    while len(make_message(Command.CITY, city).encode("utf-8")) >= MAX_MSG_SIZE:
        city = city[:-1]
    return city


def connect_to_server(name: str, port: Union[int, str]) -> socket.socket:
    """Open a TCP connection over IPv4 to ``name`` on ``port``.

    Raises :class:`ConnectionError` if the host cannot be resolved or reached.
    """
    try:
        infos = socket.getaddrinfo(name, str(port), socket.AF_INET, socket.SOCK_STREAM)
    except socket.gaierror as exc:
        raise ConnectionError(f"getaddrinfo error: {exc}") from exc
    if not infos:
        raise ConnectionError("couldn't find host addrinfo (list is empty)")

    family, socktype, proto, _canonname, address = infos[0]
    sock = socket.socket(family, socktype, proto)
    try:
        sock.connect(address)
    except OSError as exc:
        sock.close()
        raise ConnectionError(f"failed to connect: {exc}") from exc
    print("connected to server")
    return sock


def run_client(
    sock: socket.socket,
    input_stream: Optional[TextIO] = None,
    output: Optional[TextIO] = None,
) -> None:
    """Show every server message and answer each turn with a city read from input.

    Returns when the server closes the connection or the input runs out.
    """
    input_stream = input_stream if input_stream is not None else sys.stdin
    output = output if output is not None else sys.stdout

    first = _recv_frame(sock)
    if first is None:
        return
    print(f"received {first}", file=output)

    while True:
        text = _recv_frame(sock)
        if text is None:
            return
        print(f"received {text}", file=output)

        try:
            command, _data = parse_message(text)
        except ProtocolError:
            continue
        if command is Command.TURN:
            line = input_stream.readline()
            if not line:
                return
            _send_frame(sock, make_message(Command.CITY, _fit_city(line)))


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Connect to the server named on the command line and play."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 2:
        print("usage: citychain-client <ip/name> <port>")
        return 1

    try:
        sock = connect_to_server(args[0], args[1])
    except ConnectionError as exc:
        print(exc, file=sys.stderr)
        print("Couldn't connect to the server", file=sys.stderr)
        return 1

    with sock:
        try:
            run_client(sock)
        except OSError as exc:
            print(f"fail in recv(): {exc}", file=sys.stderr)
            return 1
    return 0