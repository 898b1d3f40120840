import pytest

from sam2695.button import HIGH, LOW, Button, ButtonState
from sam2695.events import EventType


class FakePin:
    def __init__(self):
        self.level = HIGH
        self.now = 0

    def read(self):
        return self.level

    def clock(self):
        return self.now


@pytest.fixture
def pin():
    return FakePin()


@pytest.fixture
def button(pin):
    return Button(pin.read, pin.clock, EventType.A_PRESSED, EventType.A_LONG_PRESSED)


def step(pin, button, at, level):
    pin.now = at
    pin.level = level
    button.update()


def test_initial_state_is_released():
    state = ButtonState()
    assert state.button_state == HIGH
    assert state.last_button_state == HIGH
    assert state.long_press_triggered is False


def test_idle_button_produces_nothing(pin, button):
    for t in (0, 100, 2000):
        step(pin, button, t, HIGH)
    assert button.take_events() == []


def test_short_press_and_release(pin, button):
    step(pin, button, 0, LOW)
    step(pin, button, 60, LOW)
    assert button.state.button_state == LOW
    assert button.take_events() == []
    step(pin, button, 200, HIGH)
    step(pin, button, 260, HIGH)
    assert button.take_events() == [EventType.A_PRESSED, EventType.BTN_RELEASED]


def test_press_not_accepted_before_debounce(pin, button):
    step(pin, button, 0, LOW)
    step(pin, button, 50, LOW)
    assert button.state.button_state == HIGH


def test_long_press_then_release_has_no_short_press(pin, button):
    step(pin, button, 0, LOW)
    step(pin, button, 60, LOW)
    step(pin, button, 1059, LOW)
    assert button.take_events() == []
    step(pin, button, 1060, LOW)
    assert button.take_events() == [EventType.A_LONG_PRESSED]
    step(pin, button, 1500, LOW)
    assert button.take_events() == []
    step(pin, button, 1600, HIGH)
    step(pin, button, 1700, HIGH)
    assert button.take_events() == [EventType.BTN_RELEASED]


def test_bounce_is_ignored(pin, button):
    for t, level in ((0, LOW), (10, HIGH), (20, LOW), (30, HIGH), (40, LOW), (45, HIGH)):
        step(pin, button, t, level)
    step(pin, button, 100, HIGH)
    assert button.take_events() == []
    assert button.state.button_state == HIGH


def test_take_events_clears_flags(pin, button):
    step(pin, button, 0, LOW)
    step(pin, button, 60, LOW)
    step(pin, button, 100, HIGH)
    step(pin, button, 200, HIGH)
    assert len(button.take_events()) == 2
    assert button.take_events() == []
    assert (button.short_pressed, button.long_pressed, button.released) == (False, False, False)


def test_custom_event_types(pin):
    button = Button(
        pin.read,
        pin.clock,
        EventType.D_PRESSED,
        EventType.D_LONG_PRESSED,
        EventType.D_RELEASED,
    )
    step(pin, button, 0, LOW)
    step(pin, button, 60, LOW)
    step(pin, button, 120, HIGH)
    step(pin, button, 200, HIGH)
    assert button.take_events() == [EventType.D_PRESSED, EventType.D_RELEASED]


def test_clock_wraparound(pin, button):
    start = 0xFFFFFFFF - 20
    step(pin, button, start, LOW)
    step(pin, button, start + 60 - 0x100000000, LOW)
    assert button.state.button_state == LOW
    step(pin, button, start + 1100 - 0x100000000, LOW)
    assert button.take_events() == [EventType.A_LONG_PRESSED]