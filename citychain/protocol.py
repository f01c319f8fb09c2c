"""Messages of the city chain game protocol.

Every message has the form ``COMMAND:DATA``.

Server messages:
    QUEUE:AMOUNT       joined the queue, or someone else joined
    START:OPPONENT_ID  game started
    TURN:LAST_CITY     your turn; ``NONE`` on the first turn of the game
    INVALID:CODE       named city is invalid (1: no such city,
                       2: wrong starting letter, 3: city already named)
    GAMEOVER:WINNER_ID opponent gave up or quit the game

Client messages:
    CITY:CITY_NAME     the city named in your turn
    GIVEUP:LAST_WORDS  give up with a parting word to the opponent
"""

from __future__ import annotations

from enum import IntEnum

MAX_COMMAND_SIZE = 10
MAX_DATA_SIZE = 101
MAX_MSG_SIZE = MAX_COMMAND_SIZE + MAX_DATA_SIZE + 1

SEPARATOR = ":"


class Command(IntEnum):
    """Commands understood by the protocol."""

    QUEUE = 0
    START = 1
    TURN = 2
    INVALID = 3
    GAMEOVER = 4
    CITY = 5
    GIVEUP = 6


class ProtocolError(ValueError):
    """Raised for a message or command the protocol does not allow."""


def command_to_str(command: Command | int) -> str:
    """Return the wire name of ``command``."""
    try:
        return Command(command).name
    except ValueError as exc:
        raise ProtocolError(f"no such command: {command!r}") from exc


def str_to_command(text: str) -> Command:
    """Return the command named ``text``."""
    try:
        return Command[text]
    except KeyError as exc:
        raise ProtocolError(f"no such command: {text!r}") from exc


def make_message(command: Command | int, data: str) -> str:
    """Build the message ``COMMAND:DATA``."""
    if len(data) >= MAX_DATA_SIZE:
        raise ProtocolError(
            f"data is {len(data)} characters, at most {MAX_DATA_SIZE - 1} allowed"
        )
    return f"{command_to_str(command)}{SEPARATOR}{data}"


def parse_message(msg: str) -> tuple[Command, str]:
    """Split a message into its command and its data.

    Anything after a NUL character is ignored, as messages travel
    NUL-terminated.
    """
    msg = msg.split("\0", 1)[0]
    name, sep, data = msg.partition(SEPARATOR)
    if not sep:
        raise ProtocolError(f"message has no {SEPARATOR!r} separator: {msg!r}")
    if len(name) >= MAX_COMMAND_SIZE:
        raise ProtocolError(f"command too long: {name!r}")
    if len(data) >= MAX_DATA_SIZE:
        raise ProtocolError(
            f"data is {len(data)} characters, at most {MAX_DATA_SIZE - 1} allowed"
        )
    return str_to_command(name), data