from glennmania.geometry import Vector2
from glennmania.graphics_object import DISPLACEMENT
from glennmania.mover import (
    CLOCKWISE_SPAN,
    LEFT_RIGHT_SPAN,
    UP_DOWN_SPAN,
    ClockwiseMovement,
    Heading,
    LeftRightMovement,
    UpDownMovement,
)
from glennmania.objects import Platform
from glennmania.timeline import Timeline

STEPS = 1000


def _platform(x=500.0, y=400.0):
    now = [0.0]
    timeline = Timeline(clock=lambda: now[0])
    now[0] = DISPLACEMENT
    timeline.update_delta_time()
    return Platform(Vector2(x, y), 0, timeline)


def _trace(movement, platform, steps=STEPS):
    positions = []
    for _ in range(steps):
        movement(platform)
        positions.append(platform.position)
    return positions


def test_clockwise_starts_left():
    platform = _platform()
    movement = ClockwiseMovement()
    movement(platform)
    assert movement.heading is Heading.LEFT
    assert platform.position.x < 500.0
    assert platform.position.y == 400.0


def test_clockwise_covers_square_and_stays_near_it():
    platform = _platform()
    positions = _trace(ClockwiseMovement(), platform)
    xs = [p.x for p in positions]
    ys = [p.y for p in positions]
    step = 1.0
    assert min(xs) <= 500.0 - CLOCKWISE_SPAN
    assert min(ys) <= 400.0 - CLOCKWISE_SPAN
    assert min(xs) >= 500.0 - CLOCKWISE_SPAN - step
    assert max(xs) <= 500.0 + step
    assert min(ys) >= 400.0 - CLOCKWISE_SPAN - step
    assert max(ys) <= 400.0 + step


def test_clockwise_returns_to_origin():
    platform = _platform()
    positions = _trace(ClockwiseMovement(), platform)
    assert Vector2(500.0, 400.0) in positions


def test_left_right_stays_on_its_line():
    platform = _platform()
    positions = _trace(LeftRightMovement(), platform)
    xs = [p.x for p in positions]
    assert all(p.y == 400.0 for p in positions)
    assert min(xs) <= 500.0 - LEFT_RIGHT_SPAN
    assert max(xs) <= 500.0
    first_far = xs.index(min(xs))
    assert 500.0 in xs[first_far:]


def test_up_down_stays_on_its_line():
    platform = _platform()
    positions = _trace(UpDownMovement(), platform)
    ys = [p.y for p in positions]
    assert all(p.x == 500.0 for p in positions)
    assert max(ys) >= 400.0 + UP_DOWN_SPAN
    assert min(ys) >= 400.0
    first_far = ys.index(max(ys))
    assert 400.0 in ys[first_far:]


def test_up_down_starts_down():
    platform = _platform()
    movement = UpDownMovement()
    movement(platform)
    assert movement.heading is Heading.DOWN
    assert platform.position.y > 400.0


def test_movements_keep_separate_state():
    first_platform = _platform()
    second_platform = _platform()
    first = LeftRightMovement()
    second = LeftRightMovement()
    _trace(first, first_platform, steps=250)
    second(second_platform)
    assert first.heading is Heading.RIGHT
    assert second.heading is Heading.LEFT


def test_pattern_follows_original_position():
    platform = _platform()
    platform.set_original_position(1000.0, 400.0)
    movement = LeftRightMovement()
    movement(platform)
    assert movement.heading is Heading.LEFT
    positions = _trace(movement, platform, steps=10)
    assert all(p.x < 500.0 for p in positions)


def test_paused_timeline_freezes_pattern():
    platform = _platform()
    platform.timeline.pause()
    positions = _trace(ClockwiseMovement(), platform, steps=50)
    assert all(p == Vector2(500.0, 400.0) for p in positions)