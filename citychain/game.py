"""The city chain game: the server side of one match, and the server command."""

from __future__ import annotations

import logging
import random
import socket
import sys
from typing import Optional, Sequence

from citychain.matchmaking import ROOM_SIZE, ClientData, matchmaking_server
from citychain.protocol import (
    MAX_MSG_SIZE,
    Command,
    ProtocolError,
    command_to_str,
    make_message,
    parse_message,
)
from citychain.server import ServerError

log = logging.getLogger(__name__)


def _send_frame(conn: socket.socket, text: str) -> None:
    """Send ``text`` as one NUL-padded frame of ``MAX_MSG_SIZE`` bytes."""
    payload = text.encode("utf-8")
    if len(payload) >= MAX_MSG_SIZE:
        raise ProtocolError(f"message too long for one frame: {text!r}")
    conn.sendall(payload.ljust(MAX_MSG_SIZE, b"\0"))


def _recv_frame(conn: socket.socket) -> Optional[str]:
    """Receive one frame; ``None`` once the peer has closed the connection."""
    frame = bytearray()
    while len(frame) < MAX_MSG_SIZE:
        chunk = conn.recv(MAX_MSG_SIZE - len(frame))
        if not chunk:
            return None
        frame += chunk
    return bytes(frame).split(b"\0", 1)[0].decode("utf-8", errors="replace")


def _reply_to(text: str) -> str:
    """Return the message the opponent gets in answer to a player's ``text``.

    A named city becomes the opponent's turn; anything else yields an
    empty message.
    """
    try:
        command, data = parse_message(text)
    except ProtocolError as exc:
        log.warning("play_cchain: No such command: %s", exc)
        return ""
    if command is Command.CITY:
        return make_message(Command.TURN, data)
    log.warning("play_cchain: Unexpected command: %s", command_to_str(command))
    return ""


def play_cchain(players: Sequence[ClientData], rng: Optional[random.Random] = None) -> None:
    """Play one city chain match between the two ``players``.

    Each player is told it has started, a randomly chosen player gets the
    first turn, and from then on every city a player names is handed to the
    opponent as its turn. The match ends when a connection closes or fails;
    all player connections are closed on return.
    """
    if len(players) != ROOM_SIZE:
        raise ValueError(f"a match needs {ROOM_SIZE} players, got {len(players)}")
    rng = rng if rng is not None else random.Random()
    conns = [player.conn for player in players]
    log.info("play_cchain: Starting game")

    try:
        for conn, opponent_id in zip(conns, ("1", "0")):
            start_msg = make_message(Command.START, opponent_id)
            _send_frame(conn, start_msg)
            log.info("play_cchain: Sent %s", start_msg)

        current = rng.randrange(ROOM_SIZE)
        first_turn = make_message(Command.TURN, "NONE")
        _send_frame(conns[current], first_turn)
        log.info("play_cchain: Sent %s", first_turn)

        while True:
            text = _recv_frame(conns[current])
            if text is None:
                log.info("play_cchain: Player %d left the game", current)
                return
            log.info("play_cchain: Player %d says %s", current, text)

            reply = _reply_to(text)
            _send_frame(conns[1 - current], reply)
            log.info("play_cchain: Sent %s", reply)
            current = 1 - current
    except OSError as exc:
        log.warning("play_cchain: connection failed: %s", exc)
    finally:
        for conn in conns:
            conn.close()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the city chain server on the port given on the command line."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1:
        print("usage: citychain-server <port>")
        return 1

    logging.basicConfig(level=logging.INFO, format="%(message)s")
    try:
        matchmaking_server(args[0], play_cchain)
    except ServerError as exc:
        print(exc, file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 0
    return 0