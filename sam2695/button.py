"""Debounced push button producing short-press, long-press and release events."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from .events import EventType

LOW = 0
HIGH = 1

DEBOUNCE_DELAY = 50  # milliseconds
LONG_PRESS_TIME = 1000  # milliseconds

_CLOCK_MASK = 0xFFFFFFFF


def _elapsed(now: int, since: int) -> int:
    """Milliseconds from ``since`` to ``now`` on a 32-bit wrapping clock."""
    return (now - since) & _CLOCK_MASK


@dataclass
class ButtonState:
    """Debounce and timing state of one button; the pin reads LOW when pressed."""

    button_state: int = HIGH
    last_button_state: int = HIGH
    last_debounce_time: int = 0
    press_start_time: int = 0
    long_press_triggered: bool = False


class Button:
    """A button on a pulled-up input, polled through ``update``.

    ``read`` returns the pin level (truthy for HIGH, falsy for LOW) and
    ``clock`` returns the current time in milliseconds.
    """

    def __init__(
        self,
        read: Callable[[], object],
        clock: Callable[[], int],
        short_press_type: EventType,
        long_press_type: EventType,
        release_type: EventType = EventType.BTN_RELEASED,
    ) -> None:
        self.read = read
        self.clock = clock
        self.short_press_type = short_press_type
        self.long_press_type = long_press_type
        self.release_type = release_type
        self.state = ButtonState()
        self.short_pressed = False
        self.long_pressed = False
        self.released = False

    def update(self) -> None:
        """Sample the pin once and raise the flags of any events it completes."""
        reading = HIGH if self.read() else LOW
        now = self.clock()
        state = self.state

        if reading != state.last_button_state:
            state.last_debounce_time = now

        if _elapsed(now, state.last_debounce_time) > DEBOUNCE_DELAY:
            if reading != state.button_state:
                state.button_state = reading
                if reading == LOW:
                    state.press_start_time = now
                    state.long_press_triggered = False
                else:
                    duration = _elapsed(now, state.press_start_time)
                    if not state.long_press_triggered and duration < LONG_PRESS_TIME:
                        self.short_pressed = True
                    self.released = True

        if (
            state.button_state == LOW
            and _elapsed(now, state.press_start_time) >= LONG_PRESS_TIME
            and not state.long_press_triggered
        ):
            self.long_pressed = True
            state.long_press_triggered = True

        state.last_button_state = reading

    def take_events(self) -> list[EventType]:
        """Return the events flagged since the last call and clear their flags."""
        events = [
            event_type
            for flagged, event_type in (
                (self.short_pressed, self.short_press_type),
                (self.long_pressed, self.long_press_type),
                (self.released, self.release_type),
            )
            if flagged
        ]
        self.short_pressed = self.long_pressed = self.released = False
        return events