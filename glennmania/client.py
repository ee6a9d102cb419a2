"""The game client: shows the world, sends input and follows server updates."""

from __future__ import annotations

import argparse
import itertools
import logging
import struct
import threading
import time
from enum import IntEnum
from typing import Any, Iterable, Optional

from .event import Event, EventType
from .geometry import Vector2

logger = logging.getLogger(__name__)

DEFAULT_HOST = "localhost"
DEFAULT_REQ_PORT = 5555
DEFAULT_SUB_PORT = 5556
NEW_CLIENT = b"REQ"

# Seconds within which three presses of the up key count as a triple press.
TRIPLE_PRESS_THRESHOLD = 0.35

_POLL_MS = 10
_JOIN_TIMEOUT = 2.0


class ClientInput(IntEnum):
    """Codes a client sends to the server."""

    HALF = 0
    REAL = 1
    DOUBLE = 2
    PAUSE = 3
    CLOSE = 4
    TRIPLEUP = 5


class TripleUpDetector:
    """Counts up-key presses made within a time window of the first one."""

    def __init__(self, threshold: float = TRIPLE_PRESS_THRESHOLD) -> None:
        self.threshold = threshold
        self._armed = False
        self._started = 0.0
        self._count = 0

    def press(self, now: float) -> bool:
        """Record a press at time ``now``; True on the third press in the window."""
        if self._armed and now - self._started <= self.threshold:
            self._count += 1
            if self._count == 3:
                self._count = 0
                return True
            return False
        self._armed = True
        self._started = now
        self._count = 1
        return False


def format_request(client_id: Any, position: Vector2, inputs: Iterable[int]) -> str:
    """Encode a client's update as ``id [ x y ]`` followed by its input codes."""
    codes = "".join(f" {int(code)}" for code in inputs)
    return f"{client_id} [ {position.x:g} {position.y:g} ]{codes}"


def decode_client_id(reply: bytes) -> int:
    """Read the identifier the server assigned, a 4-byte little-endian integer."""
    if len(reply) < 4:
        raise ValueError(f"client id reply too short: {reply!r}")
    return struct.unpack_from("<i", reply)[0]


def dedupe_adjacent(inputs: Iterable[ClientInput]) -> list[ClientInput]:
    """Drop inputs that repeat the one right before them."""
    return [key for key, _ in itertools.groupby(inputs)]


def _request_loop(
    socket: Any, client_id: str, state: Any, pending: list, lock: threading.Lock
) -> None:
    running = True
    while running:
        with lock:
            inputs = list(pending)
            pending.clear()
            position = state.character_position
        if ClientInput.CLOSE in inputs:
            running = False
        socket.send_string(format_request(client_id, position, inputs))
        socket.recv()


def _key_inputs(key: int, detector: TripleUpDetector, now: float) -> list[ClientInput]:
    import pygame

    inputs: list[ClientInput] = []
    if key == pygame.K_UP and detector.press(now):
        inputs.append(ClientInput.TRIPLEUP)
    mapping = {
        pygame.K_p: ClientInput.PAUSE,
        pygame.K_1: ClientInput.HALF,
        pygame.K_2: ClientInput.REAL,
        pygame.K_3: ClientInput.DOUBLE,
    }
    if key in mapping:
        if key == pygame.K_p:
            logger.info("P")
        inputs.append(mapping[key])
    return inputs


def _raise_held_keys(state: Any, pressed: Any) -> None:
    import pygame

    moves = (
        ((pygame.K_UP, pygame.K_SPACE), EventType.UP, "up"),
        ((pygame.K_DOWN,), EventType.DOWN, "down"),
        ((pygame.K_LEFT,), EventType.LEFT, "left"),
        ((pygame.K_RIGHT,), EventType.RIGHT, "right"),
    )
    for keys, kind, name in moves:
        if any(pressed[key] for key in keys):
            event = Event(kind, state.timestamp)
            event.add_character(state.character)
            event.add_metadata(f"Client from input {name}")
            state.event_handler.on_event(event)


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Run a game client.")
    parser.add_argument("--host", default=DEFAULT_HOST, help="server host")
    parser.add_argument("--req-port", type=int, default=DEFAULT_REQ_PORT)
    parser.add_argument("--sub-port", type=int, default=DEFAULT_SUB_PORT)
    args = parser.parse_args(argv)

    import pygame
    import zmq

    from .client_state import ClientGameState
    from .runner import FRAME_RATE, WINDOW_SIZE, WINDOW_TITLE, GameRunner

    logging.basicConfig(level=logging.INFO, format="%(message)s")

    context = zmq.Context()
    req_socket = context.socket(zmq.REQ)
    logger.info("Connecting to server...")
    req_socket.connect(f"tcp://{args.host}:{args.req_port}")

    sub_socket = context.socket(zmq.SUB)
    sub_socket.setsockopt(zmq.CONFLATE, 1)
    sub_socket.connect(f"tcp://{args.host}:{args.sub_port}")
    sub_socket.setsockopt(zmq.SUBSCRIBE, b"")

    req_socket.send(NEW_CLIENT)
    client_number = decode_client_id(req_socket.recv())
    client_id = str(client_number)
    logger.info("id%s", client_id)

    pygame.init()
    screen = pygame.display.set_mode(WINDOW_SIZE)
    pygame.display.set_caption(WINDOW_TITLE)
    frame_clock = pygame.time.Clock()

    state = ClientGameState(client_number)
    runner = GameRunner(state, client_number)
    runner.draw(screen)
    pygame.display.flip()

    pending: list[ClientInput] = []
    lock = threading.Lock()
    requester = threading.Thread(
        target=_request_loop,
        args=(req_socket, client_id, state, pending, lock),
        daemon=True,
    )
    requester.start()

    detector = TripleUpDetector()
    running = True
    try:
        while running:
            if sub_socket.poll(_POLL_MS):
                data = sub_socket.recv().decode("utf-8")
                if data:
                    runner.deserialize(data)

            state.update_game_state()
            runner.draw(screen)
            pygame.display.flip()

            inputs: list[ClientInput] = []
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                    inputs.append(ClientInput.CLOSE)
                elif event.type == pygame.KEYDOWN:
                    inputs.extend(_key_inputs(event.key, detector, time.monotonic()))

            focused = pygame.key.get_focused()
            if focused:
                _raise_held_keys(state, pygame.key.get_pressed())
            # Triple presses are forwarded to the server with the other inputs.
            if focused or not running:
                with lock:
                    pending[:] = dedupe_adjacent(inputs)

            frame_clock.tick(FRAME_RATE)
    except KeyboardInterrupt:
        with lock:
            pending[:] = [ClientInput.CLOSE]
    finally:
        requester.join(_JOIN_TIMEOUT)
        req_socket.close(linger=0)
        sub_socket.close(linger=0)
        context.term()
        pygame.quit()
    return 0