# citychain

A small networked city chain game for two players. Players take turns naming
cities. A matchmaking server puts connected players into rooms of two and runs
a match in each room. In each match, every city one player names is passed to
the other player as the start of their turn.

## Installation

```
pip install .
```

The package uses only the standard library.

## Running a server

```
citychain-server 5000
```

The server listens on the given TCP port on all IPv4 addresses. It queues
each player who connects. When two players are waiting, it starts a match
between them in a new thread. Progress is logged to the console.

When a match starts:

1. Each player is sent `START:1` or `START:0`.
2. One player, chosen at random, is sent `TURN:NONE`.
3. From then on, when the player whose turn it is sends `CITY:<name>`, the
   opponent is sent `TURN:<name>` and the turn passes to the opponent.
4. Any other message from that player results in an empty message being sent
   to the opponent, and the turn still passes.

The match ends when either connection closes or fails. Both connections are
then closed.

## Joining a game

```
citychain-client localhost 5000
```

The client connects over IPv4 and prints each message from the server as
`received <message>`. When a `TURN` message arrives, type a city name and
press Enter. The line is sent as `CITY:<name>`, shortened if it is too long
for a frame. The client stops when the server closes the connection or the
input ends.

## Protocol

Every message is a command and a data field joined by a colon
(`COMMAND:DATA`). On the wire, each message travels in a frame of
`MAX_MSG_SIZE` (112) bytes. The frame is UTF-8 and padded with NUL bytes.

| Command | Sent by | Meaning |
|---|---|---|
| `QUEUE:AMOUNT` | server | joined the queue, or someone else did |
| `START:OPPONENT_ID` | server | the game has started |
| `TURN:LAST_CITY` / `TURN:NONE` | server | your turn; `NONE` on the first turn |
| `INVALID:CODE` | server | rejected city: 1 no such city, 2 wrong starting letter, 3 already named |
| `GAMEOVER:WINNER_ID` | server | the opponent gave up or left |
| `CITY:CITY_NAME` | client | the city named on your turn |
| `GIVEUP:LAST_WORDS` | client | give up with a parting word |

`citychain.protocol` builds and parses these messages:

```python
from citychain.protocol import Command, make_message, parse_message

msg = make_message(Command.CITY, "Oslo")   # "CITY:Oslo"
command, data = parse_message(msg)          # (Command.CITY, "Oslo")
```

- `command_to_str` and `str_to_command` convert between `Command` values and
  their wire names.
- `parse_message` ignores anything after a NUL character.
- Data is limited to 100 characters and a command name to 9.
- An unknown command, a missing colon or data that is too long raises
  `ProtocolError`, which is a subclass of `ValueError`.

## Library pieces

- `citychain.ts_queue.TSQueue` is a FIFO queue guarded by a lock (`mutex`).
  - `enqueue` and `dequeue` take the lock. The `*_nolock` variants do not.
  - `head()`, `tail()`, `is_empty()`, `len()` and iteration inspect the queue.
  - An optional `data_destructor` is called on each item as it leaves the
    queue, either by dequeue or by `destroy()`.
- `citychain.server.start_server` binds and listens on a port.
  `citychain.server.serve` accepts connections and calls a callback in a new
  thread for each one. Both raise `ServerError` if the server cannot start.
- `citychain.matchmaking.Matchmaker` queues players (`enqueue_player`) and
  groups them into rooms of two (`form_rooms`, or `run` to keep doing so).
  It calls `on_match` with each room in a new thread.
  - `matchmaking_server(port, on_match)` runs a `Matchmaker` behind `serve`.
  - `format_queue` renders queued players' descriptors as `[ a b ]`.
- `citychain.game.play_cchain` plays one match between two `ClientData`
  players. It takes an optional `random.Random` that chooses who moves first.
- `citychain.client.connect_to_server` and `citychain.client.run_client`
  provide the client side.

## What it does not do

The server only relays cities between players. It does not:

- check that a city exists, that it starts with the right letter, or that it
  has not been named already;
- send `QUEUE`, `INVALID` or `GAMEOVER` messages;
- treat `GIVEUP` as the end of a match.

## Tests

```
pip install ".[test]"
pytest
```