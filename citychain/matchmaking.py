"""Matchmaking: queue connected players and start a game for every pair."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Union

from citychain.server import serve
from citychain.ts_queue import TSQueue

log = logging.getLogger(__name__)

ROOM_SIZE = 2


@dataclass(eq=False)
class ClientData:
    """A connected player."""

    conn: Any

    @property
    def connfd(self) -> int:
        """File descriptor of the player's connection."""
        return self.conn.fileno()


Room = tuple  # tuple of ROOM_SIZE ClientData


def format_queue(queue: Iterable[ClientData]) -> str:
    """Render the connection descriptors of queued players as ``[ a b ]``."""
    return "[ " + "".join(f"{client.connfd} " for client in queue) + "]"


class Matchmaker:
    """Collects players and calls ``on_match`` in a new thread for each room."""

    def __init__(self, on_match: Callable[[tuple], object]) -> None:
        self.on_match = on_match
        self.queue = TSQueue()
        self.matches = TSQueue()
        self._has_match = threading.Condition(self.queue.mutex)

    def enqueue_player(self, conn: Any) -> ClientData:
        """Put a newly connected player at the back of the queue."""
        client = ClientData(conn)
        with self._has_match:
            self.queue.enqueue_nolock(client)
            log.info(
                "enqueue_new_player: Put %d in the queue %s",
                client.connfd,
                format_queue(self.queue),
            )
            self._has_match.notify()
        return client

    def form_rooms(self) -> list[tuple]:
        """Group queued players into rooms and start a match for each.

        Players are taken in arrival order; those left over stay queued.
        Returns the rooms formed.
        """
        with self.queue.mutex:
            return self._form_rooms_nolock()

    def _form_rooms_nolock(self) -> list[tuple]:
        rooms = []
        while len(self.queue) >= ROOM_SIZE:
            room = tuple(self.queue.dequeue_nolock() for _ in range(ROOM_SIZE))
            log.info("matchmake: Created a room %s", format_queue(self.queue))
            self.matches.enqueue(room)
            threading.Thread(target=self.on_match, args=(room,), daemon=True).start()
            rooms.append(room)
        return rooms

    def run(self) -> None:
        """Wait for enough players and form rooms, forever."""
        while True:
            with self._has_match:
                self._has_match.wait_for(lambda: len(self.queue) >= ROOM_SIZE)
                self._form_rooms_nolock()


def matchmaking_server(
    port: Union[int, str], on_match: Callable[[tuple], object]
) -> None:
    """Accept players on ``port`` and call ``on_match`` for every full room."""
    matchmaker = Matchmaker(on_match)
    threading.Thread(target=matchmaker.run, daemon=True).start()
    serve(port, matchmaker.enqueue_player)