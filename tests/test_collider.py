import pytest

from glennmania.collider import X_AXIS, Y_AXIS, check_collision, is_character_grounded
from glennmania.event import EventType, VariantType
from glennmania.geometry import Rect, Vector2
from glennmania.timeline import Timeline


class FakeClock:
    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now


class Body:
    def __init__(self, left, top, width, height, velocity=None, identifier=0, timeline=None):
        self.bounds = Rect(left, top, width, height)
        self.velocity = velocity if velocity is not None else Vector2()
        self.identifier = identifier
        self.timeline = timeline

    def global_bounds(self):
        return self.bounds

    def effective_velocity(self):
        return self.velocity


class Recorder:
    def __init__(self):
        self.events = []

    def on_event(self, event):
        self.events.append(event)


def test_grounded_when_feet_reach_platform_top():
    character = Body(0.0, 0.0, 10.0, 20.0)
    ground = Body(0.0, 20.0, 50.0, 5.0)
    assert is_character_grounded(character, ground) is True


def test_not_grounded_above_platform():
    character = Body(0.0, 0.0, 10.0, 10.0)
    ground = Body(0.0, 20.0, 50.0, 5.0)
    assert is_character_grounded(character, ground) is False


def test_not_grounded_beside_platform():
    character = Body(100.0, 0.0, 10.0, 30.0)
    ground = Body(0.0, 20.0, 50.0, 5.0)
    assert is_character_grounded(character, ground) is False


def test_no_collision_when_apart():
    recorder = Recorder()
    character = Body(0.0, 0.0, 10.0, 30.0)
    other = Body(100.0, 100.0, 10.0, 10.0, timeline=Timeline(FakeClock()))
    assert check_collision(character, other, True, recorder) is False
    assert recorder.events == []


def test_height_reduction_avoids_collision_at_feet():
    character = Body(0.0, 0.0, 10.0, 30.0)
    other = Body(0.0, 25.0, 10.0, 10.0)
    assert check_collision(character, other, False) is False


def test_velocity_moves_the_checked_position():
    character = Body(0.0, 0.0, 10.0, 30.0)
    other = Body(15.0, 0.0, 10.0, 20.0)
    assert check_collision(character, other, False) is False
    character.velocity = Vector2(10.0, 0.0)
    assert check_collision(character, other, False) is True


def test_collision_without_response_raises_no_event():
    recorder = Recorder()
    character = Body(0.0, 0.0, 100.0, 110.0)
    other = Body(90.0, 0.0, 20.0, 100.0)
    assert check_collision(character, other, False, recorder) is True
    assert recorder.events == []


def test_response_needs_handler():
    character = Body(0.0, 0.0, 100.0, 110.0)
    other = Body(90.0, 0.0, 20.0, 100.0)
    with pytest.raises(ValueError):
        check_collision(character, other, True)


def test_x_collision_event():
    clock = FakeClock()
    timeline = Timeline(clock)
    clock.now += 4.0
    recorder = Recorder()
    character = Body(0.0, 0.0, 100.0, 110.0, identifier=7)
    other = Body(90.0, 0.0, 20.0, 100.0, identifier=3, timeline=timeline)

    assert check_collision(character, other, True, recorder) is True
    assert len(recorder.events) == 1
    event = recorder.events[0]
    assert event.event_type is EventType.COLLISION
    assert event.timestamp == timeline.timestamp
    assert event.get(VariantType.CHAR_REF) is character
    assert event.get(VariantType.GRAPHICS_OBJ) is other
    assert event.get(VariantType.COLLISION_DIR) == X_AXIS
    assert "character 7" in event.metadata
    assert "object 3" in event.metadata


def test_y_collision_event():
    recorder = Recorder()
    character = Body(0.0, 0.0, 100.0, 110.0)
    other = Body(0.0, 95.0, 100.0, 50.0, timeline=Timeline(FakeClock()))
    assert check_collision(character, other, True, recorder) is True
    assert recorder.events[0].get(VariantType.COLLISION_DIR) == Y_AXIS


def test_square_overlap_has_no_axis():
    recorder = Recorder()
    character = Body(0.0, 0.0, 20.0, 30.0)
    other = Body(10.0, 10.0, 10.0, 10.0, timeline=Timeline(FakeClock()))
    assert check_collision(character, other, True, recorder) is True
    assert recorder.events[0].get(VariantType.COLLISION_DIR) is None