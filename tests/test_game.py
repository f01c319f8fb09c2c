import socket
import threading

import pytest

from citychain.game import main, play_cchain
from citychain.matchmaking import ClientData
from citychain.protocol import MAX_MSG_SIZE, Command, make_message


class FixedRng:
    def __init__(self, value):
        self.value = value

    def randrange(self, n):
        return self.value


def recv_frame(sock):
    data = bytearray()
    while len(data) < MAX_MSG_SIZE:
        chunk = sock.recv(MAX_MSG_SIZE - len(data))
        if not chunk:
            return None
        data += chunk
    return bytes(data)


def text_of(frame):
    return frame.split(b"\0", 1)[0].decode("utf-8")


def send_frame(sock, text):
    sock.sendall(text.encode("utf-8").ljust(MAX_MSG_SIZE, b"\0"))


@pytest.fixture
def match():
    pairs = [socket.socketpair() for _ in range(2)]
    server_side = tuple(ClientData(a) for a, _ in pairs)
    clients = [b for _, b in pairs]
    for client in clients:
        client.settimeout(5)
    yield server_side, clients
    for a, b in pairs:
        a.close()
        b.close()


def start(server_side, first):
    thread = threading.Thread(
        target=play_cchain, args=(server_side, FixedRng(first)), daemon=True
    )
    thread.start()
    return thread


def test_start_messages_and_first_turn(match):
    server_side, clients = match
    thread = start(server_side, 0)
    assert text_of(recv_frame(clients[0])) == "START:1"
    assert text_of(recv_frame(clients[1])) == "START:0"
    assert text_of(recv_frame(clients[0])) == "TURN:NONE"
    clients[0].close()
    thread.join(5)
    assert not thread.is_alive()


def test_second_player_can_get_first_turn(match):
    server_side, clients = match
    thread = start(server_side, 1)
    recv_frame(clients[0])
    recv_frame(clients[1])
    assert text_of(recv_frame(clients[1])) == make_message(Command.TURN, "NONE")
    clients[1].close()
    thread.join(5)
    assert not thread.is_alive()


def test_frames_have_fixed_size(match):
    server_side, clients = match
    thread = start(server_side, 0)
    frame = recv_frame(clients[0])
    assert len(frame) == MAX_MSG_SIZE
    assert frame.endswith(b"\0")
    clients[0].close()
    thread.join(5)


def test_cities_are_relayed_as_turns(match):
    server_side, clients = match
    thread = start(server_side, 0)
    for client in clients:
        recv_frame(client)
    recv_frame(clients[0])

    send_frame(clients[0], make_message(Command.CITY, "Moscow"))
    assert text_of(recv_frame(clients[1])) == make_message(Command.TURN, "Moscow")

    send_frame(clients[1], make_message(Command.CITY, "Warsaw"))
    assert text_of(recv_frame(clients[0])) == make_message(Command.TURN, "Warsaw")

    clients[0].close()
    thread.join(5)
    assert not thread.is_alive()


@pytest.mark.parametrize(
    "message", [make_message(Command.GIVEUP, "bye"), "hello", "BOGUS:data"]
)
def test_unexpected_message_gives_empty_frame(match, message):
    server_side, clients = match
    thread = start(server_side, 0)
    for client in clients:
        recv_frame(client)
    recv_frame(clients[0])

    send_frame(clients[0], message)
    frame = recv_frame(clients[1])
    assert frame == b"\0" * MAX_MSG_SIZE

    clients[1].close()
    thread.join(5)
    assert not thread.is_alive()


def test_disconnect_ends_game_and_closes_connections(match):
    server_side, clients = match
    thread = start(server_side, 0)
    for client in clients:
        recv_frame(client)
    recv_frame(clients[0])

    clients[0].close()
    thread.join(5)
    assert not thread.is_alive()
    assert clients[1].recv(MAX_MSG_SIZE) == b""


def test_wrong_number_of_players():
    a, b = socket.socketpair()
    try:
        with pytest.raises(ValueError):
            play_cchain((ClientData(a),), FixedRng(0))
    finally:
        a.close()
        b.close()


def test_main_usage(capsys):
    assert main([]) == 1
    assert "usage" in capsys.readouterr().out