"""The game server: replies to client requests and publishes the world."""

from __future__ import annotations

import argparse
import logging
import struct
import threading
import time
from typing import Any, Optional

import zmq

from .game_state import split
from .server_state import ServerGameState

logger = logging.getLogger(__name__)

DEFAULT_REP_ADDRESS = "tcp://*:5555"
DEFAULT_PUB_ADDRESS = "tcp://*:5556"

NEW_CLIENT = "REQ"
ACK = b"R"
CLOSE_CODE = "4"
# Code sent on behalf of a client that stopped talking to the server.
SILENT_CLIENT_CODE = "8"

DISCONNECT_INTERVAL = 2.0
PUBLISH_INTERVAL = 0.01
# The scripted object is pushed right until it passes this x coordinate.
SCRIPTED_OBJECT_ID = 2
SCRIPTED_OBJECT_LIMIT = 3150.0

_POLL_MS = 100


def encode_client_id(identifier: int) -> bytes:
    """The reply that tells a new client its identifier."""
    return struct.pack("<i", identifier)


class GameServer:
    """Tracks connected clients and turns their requests into game input.

    Each client's message count since the last sweep is kept; a client that
    sent nothing between two sweeps counts as disconnected. ``script_manager``,
    when set, has ``run_one`` called on each tick to push the scripted object.
    """

    def __init__(self, state: ServerGameState) -> None:
        self.state = state
        self.script_manager: Any = None
        self._connections: dict[str, int] = {}
        self._lock = threading.Lock()
        self._stop = threading.Event()

    @property
    def connections(self) -> dict[str, int]:
        """A snapshot of client ids and their message counts since the last sweep."""
        with self._lock:
            return dict(self._connections)

    def handle_request(self, message: bytes | str) -> bytes:
        """Process one client message and return the reply to send back.

        A new client gets its identifier as a 4-byte little-endian integer;
        a known client's position and input codes are applied and ``b"R"``
        is returned.
        """
        text = message.decode("utf-8") if isinstance(message, bytes) else message
        fields = split(text, " ")
        client_id = fields[0] if fields else NEW_CLIENT

        with self._lock:
            known = client_id in self._connections
        if client_id == NEW_CLIENT or not known:
            identifier = self.state.new_character()
            with self._lock:
                self._connections[str(identifier)] = 1
            logger.info("Client %d connected.", identifier)
            return encode_client_id(identifier)

        with self._lock:
            self._connections[client_id] = self._connections.get(client_id, 0) + 1

        x, y = float(fields[2]), float(fields[3])
        try:
            self.state.update_character_position(client_id, x, y)
        except KeyError:
            logger.warning("Client %s has no character yet.", client_id)

        for code in fields[5:]:
            self.state.input(client_id, code)
            if code == CLOSE_CODE:
                logger.info("Client %s disconnected.", client_id)
                with self._lock:
                    self._connections.pop(client_id, None)
        return ACK

    def sweep_disconnects(self) -> list[str]:
        """Drop clients silent since the last sweep and reset all counts.

        Returns the ids of the clients dropped.
        """
        with self._lock:
            silent = [key for key, count in self._connections.items() if count == 0]
            for key in self._connections:
                self._connections[key] = 0

        for key in silent:
            logger.info("Client %s disconnected.", key)
            self.state.input(key, SILENT_CLIENT_CODE)
            with self._lock:
                self._connections.pop(key, None)
        return silent

    def tick(self) -> Optional[str]:
        """Advance the game once and return the state to publish.

        Nothing happens, and None is returned, while no client is connected.
        """
        with self._lock:
            if not self._connections:
                return None

        self.state.update_game_state()

        scripted = self.state.find_object(SCRIPTED_OBJECT_ID)
        if (
            self.script_manager is not None
            and scripted is not None
            and scripted.position.x < SCRIPTED_OBJECT_LIMIT
        ):
            self.script_manager.run_one("modify_position_right", False, "object_context")

        return self.state.serialize()

    def _reply_loop(self, socket: Any) -> None:
        poller = zmq.Poller()
        poller.register(socket, zmq.POLLIN)
        while not self._stop.is_set():
            if not dict(poller.poll(_POLL_MS)):
                continue
            request = socket.recv()
            try:
                reply = self.handle_request(request)
            except (ValueError, IndexError):
                logger.exception("Malformed request: %r", request)
                reply = ACK
            socket.send(reply)

    def _disconnect_loop(self) -> None:
        while not self._stop.is_set():
            if not self.connections:
                self._stop.wait(PUBLISH_INTERVAL)
                continue
            if self._stop.wait(DISCONNECT_INTERVAL):
                return
            self.sweep_disconnects()

    def run(
        self,
        rep_address: str = DEFAULT_REP_ADDRESS,
        pub_address: str = DEFAULT_PUB_ADDRESS,
    ) -> None:
        """Serve requests and publish the world until interrupted."""
        context = zmq.Context()
        rep_socket = context.socket(zmq.REP)
        pub_socket = context.socket(zmq.PUB)
        rep_socket.bind(rep_address)
        pub_socket.bind(pub_address)

        self._stop.clear()
        workers = [
            threading.Thread(target=self._reply_loop, args=(rep_socket,), daemon=True),
            threading.Thread(target=self._disconnect_loop, daemon=True),
        ]
        for worker in workers:
            worker.start()

        try:
            while not self._stop.is_set():
                data = self.tick()
                if data is None:
                    time.sleep(PUBLISH_INTERVAL)
                    continue
                pub_socket.send(data.encode("utf-8"))
                time.sleep(PUBLISH_INTERVAL)
        except KeyboardInterrupt:
            pass
        finally:
            self._stop.set()
            for worker in workers:
                worker.join()
            rep_socket.close(linger=0)
            pub_socket.close(linger=0)
            context.term()


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Run the game server.")
    parser.add_argument("--rep", default=DEFAULT_REP_ADDRESS, help="request address")
    parser.add_argument("--pub", default=DEFAULT_PUB_ADDRESS, help="publish address")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(message)s")
    server = GameServer(ServerGameState())
    server.run(args.rep, args.pub)
    return 0