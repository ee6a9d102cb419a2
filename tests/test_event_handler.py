import pytest

from glennmania.character import Character
from glennmania.event import Event, EventType
from glennmania.event_handler import CHARACTER_DEATH_TIME, EventHandler
from glennmania.geometry import Vector2
from glennmania.objects import SPAWN_POINT_POSITION, Item, Platform
from glennmania.timeline import Timeline


class Clock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


class FakeState:
    def __init__(self):
        self.added = []
        self.removed = []

    def add_character(self, character):
        self.added.append(character)

    def remove_object(self, identifier):
        self.removed.append(identifier)


class Mover:
    def __init__(self):
        self.calls = []

    def up(self):
        self.calls.append("up")

    def down(self):
        self.calls.append("down")

    def left(self):
        self.calls.append("left")

    def right(self):
        self.calls.append("right")


class Scripts:
    def __init__(self):
        self.runs = []

    def run_one(self, script_id, reload, context_name):
        self.runs.append((script_id, reload, context_name))


@pytest.fixture
def clock():
    return Clock()


@pytest.fixture
def state():
    return FakeState()


@pytest.fixture
def handler(clock, state):
    return EventHandler(Timeline(clock), state)


def test_events_with_same_timestamp_replace(handler):
    handler.on_event(Event(EventType.PAUSE, 1.0))
    handler.on_event(Event(EventType.PAUSE, 1.0))
    handler.on_event(Event(EventType.PAUSE, 2.0))
    assert len(handler) == 2


def test_future_events_wait(handler, clock):
    target = Timeline()
    event = Event(EventType.PAUSE, 5.0)
    event.add_timeline(target)
    handler.on_event(event)
    clock.now = 1.0
    handler.handle_events()
    assert len(handler) == 1
    assert target.paused is False


def test_pause_toggles_timeline(handler):
    target = Timeline()
    event = Event(EventType.PAUSE, 0.0)
    event.add_timeline(target)
    handler.on_event(event)
    handler.handle_events()
    assert target.paused is True
    assert len(handler) == 0


def test_tic_change(handler):
    target = Timeline()
    event = Event(EventType.TIC_CHANGE, 0.0)
    event.add_timeline(target)
    event.add_tic_scale(Timeline.SCALE_DOUBLE)
    handler.on_event(event)
    handler.handle_events()
    assert target.tic_size == Timeline.SCALE_DOUBLE


def test_client_disconnect_removes_character(handler, state):
    event = Event(EventType.CLIENT_DISCONNECT, 0.0)
    event.add_character_id(12)
    handler.on_event(event)
    assert len(handler) == 1
    handler.handle_events()
    assert len(handler) == 0
    assert state.removed == [12]


def test_spawn_adds_character(handler, state):
    event = Event(EventType.SPAWN, 0.0)
    event.add_character_id(9)
    handler.on_event(event)
    handler.handle_events()
    assert len(handler) == 0
    assert len(state.added) == 1
    added = state.added[0]
    assert isinstance(added, Character)
    assert added.identifier == 9
    assert added.position == SPAWN_POINT_POSITION


def test_spawn_without_state_fails(clock):
    handler = EventHandler(Timeline(clock))
    event = Event(EventType.SPAWN, 0.0)
    event.add_character_id(9)
    handler.on_event(event)
    with pytest.raises(RuntimeError):
        handler.handle_events()


@pytest.mark.parametrize(
    "obj, direction, removed",
    [
        (Item(Vector2(0.0, 0.0), 4, None), 0, [4]),
        (Item(Vector2(0.0, 0.0), 4, None), 1, []),
        (Platform(Vector2(0.0, 0.0), 5, None), 0, []),
    ],
)
def test_collision(handler, state, obj, direction, removed):
    event = Event(EventType.COLLISION, 0.0)
    event.add_graphics_object(obj)
    event.add_collision_direction(direction)
    handler.on_event(event)
    assert len(handler) == 1
    handler.handle_events()
    assert len(handler) == 0
    assert state.removed == removed


@pytest.mark.parametrize(
    "event_type, call",
    [
        (EventType.UP, "up"),
        (EventType.DOWN, "down"),
        (EventType.LEFT, "left"),
        (EventType.RIGHT, "right"),
    ],
)
def test_character_input(handler, event_type, call):
    mover = Mover()
    event = Event(event_type, 0.0)
    event.add_character(mover)
    handler.on_event(event)
    handler.handle_events()
    assert mover.calls == [call]


def test_events_run_in_timestamp_order(handler, clock):
    mover = Mover()
    for stamp, kind in [(0.3, EventType.RIGHT), (0.1, EventType.UP), (0.2, EventType.LEFT)]:
        event = Event(kind, stamp)
        event.add_character(mover)
        handler.on_event(event)
    clock.now = 1.0
    handler.handle_events()
    assert mover.calls == ["up", "left", "right"]


def test_death_then_respawn(handler, clock):
    character = Character(Vector2(200.0, 200.0), 3, None)
    event = Event(EventType.DEATH, 0.0)
    event.add_character(character)
    handler.on_event(event)
    handler.handle_events()
    assert character.position == Vector2(-10000000.0, -10000000.0)
    assert len(handler) == 1

    clock.now = CHARACTER_DEATH_TIME / 2
    handler.handle_events()
    assert character.was_respawned() is False

    clock.now = CHARACTER_DEATH_TIME
    handler.handle_events()
    assert character.was_respawned() is True
    assert character.position == SPAWN_POINT_POSITION
    assert len(handler) == 0


def test_triple_up_runs_script(handler):
    scripts = Scripts()
    handler.add_script_manager(scripts)
    handler.on_event(Event(EventType.TRIPLE_UP, 0.0))
    handler.handle_events()
    assert scripts.runs == [("handle_triple_up_event", True, "object_context")]


def test_triple_up_without_scripts_is_consumed(handler):
    handler.on_event(Event(EventType.TRIPLE_UP, 0.0))
    handler.handle_events()
    assert len(handler) == 0