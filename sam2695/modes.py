"""The device's play modes: audition, tempo, track selection and error."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, ClassVar, Optional

from .definitions import BASIC_TIME, NOTE_C4, VELOCITY_MAX, Instrument
from .events import Event, EventType
from .machine import State, StateMachine, StateManager
from .synth import Synth

MAX_TAP_INTERVAL = 2000  # milliseconds a tempo tap sequence may span
TAPS_PER_TEMPO = 4
RELEASE_SETTLE_TIME = 0.05  # seconds waited before silencing on release

_AUDITION_CHANNEL = 0

_log = logging.getLogger(__name__)


def _millis() -> int:
    return int(time.monotonic() * 1000)


@dataclass
class Controls:
    """What the modes share: the synthesizer, the state registry and the play flags.

    ``tracks`` holds the on/off switch of the four tracks selected in track
    mode; ``drum_on`` switches the drum pattern. The tap fields record a tempo
    being tapped in BPM mode.
    """

    synth: Synth
    manager: StateManager = field(default_factory=StateManager.get_instance)
    clock: Callable[[], int] = _millis
    sleep: Callable[[float], object] = time.sleep
    entry_flag: bool = True
    tracks: list[bool] = field(default_factory=lambda: [False] * 4)
    drum_on: bool = False
    tap_start_time: int = 0
    tap_count: int = 0
    is_recording: bool = False


class _Mode(State):
    def __init__(self, controls: Controls) -> None:
        self.controls = controls

    def on_enter(self) -> None:
        _log.info("enter %s", self.name)

    def _switch_to(self, machine: StateMachine, state_id: int) -> bool:
        """Change to the registered state ``state_id``; return whether it exists."""
        next_state = self.controls.manager.get_state(state_id)
        if next_state is None:
            return False
        machine.change_state(next_state)
        self.controls.entry_flag = True
        return True


class AuditionMode(_Mode):
    """Mode 1: step through instruments and pitches, hearing each one."""

    ID: ClassVar[int] = 1
    name: ClassVar[str] = "AuditionMode"

    def __init__(self, controls: Controls) -> None:
        super().__init__(controls)
        self.instrument = int(Instrument.GRAND_PIANO_1)

    def on_enter(self) -> None:
        """Log the entry."""
        super().on_enter()

    def on_exit(self) -> None:
        """Stop the drum pattern."""
        _log.info("exit %s", self.name)
        self.controls.drum_on = False

    def handle_event(self, machine: Optional[StateMachine], event: Optional[Event]) -> bool:
        """Play, retune or switch on a button event; return whether it was handled."""
        if machine is None or event is None:
            return False
        controls = self.controls
        synth = controls.synth
        kind = event.type

        if kind == EventType.A_PRESSED:
            self.instrument += 1
            if self.instrument > Instrument.GUNSHOT:
                self.instrument = int(Instrument.GRAND_PIANO_1)
            synth.set_instrument(0, _AUDITION_CHANNEL, self.instrument)
            synth.note_on(_AUDITION_CHANNEL, NOTE_C4, VELOCITY_MAX)
            return True
        if kind == EventType.B_PRESSED:
            synth.decrease_pitch()
            synth.note_on(_AUDITION_CHANNEL, synth.pitch, VELOCITY_MAX)
            return True
        if kind == EventType.C_PRESSED:
            synth.increase_pitch()
            synth.note_on(_AUDITION_CHANNEL, synth.pitch, VELOCITY_MAX)
            return True
        if kind == EventType.D_PRESSED:
            controls.drum_on = not controls.drum_on
            return True
        if kind == EventType.A_LONG_PRESSED:
            return True
        if kind == EventType.B_LONG_PRESSED:
            synth.increase_velocity()
            return True
        if kind == EventType.C_LONG_PRESSED:
            synth.decrease_velocity()
            return True
        if kind == EventType.D_LONG_PRESSED:
            if not self._switch_to(machine, BpmMode.ID):
                controls.entry_flag = False
            return True
        if kind == EventType.BTN_RELEASED:
            controls.sleep(RELEASE_SETTLE_TIME)
            synth.all_notes_off(_AUDITION_CHANNEL)
            controls.entry_flag = True
        return False


class BpmMode(_Mode):
    """Mode 2: set the tempo by tapping or stepping it."""

    ID: ClassVar[int] = 2
    name: ClassVar[str] = "BpmMode"

    def on_enter(self) -> None:
        """Log the entry."""
        super().on_enter()

    def on_exit(self) -> None:
        """Stop the drum pattern."""
        _log.info("exit %s", self.name)
        self.controls.drum_on = False

    def _tap(self) -> None:
        controls = self.controls
        now = controls.clock()
        if not controls.is_recording:
            controls.tap_start_time = now
            controls.tap_count = 1
            controls.is_recording = True
        elif now - controls.tap_start_time <= MAX_TAP_INTERVAL:
            controls.tap_count += 1
        else:
            controls.is_recording = False
            controls.tap_count = 0

        if controls.tap_count == TAPS_PER_TEMPO:
            bpm = BASIC_TIME // (now - controls.tap_start_time)
            # The tempo setting takes a single byte.
            controls.synth.bpm = bpm & 0xFF
            _log.info("BPM: %d", bpm)
            controls.is_recording = False
            controls.tap_start_time = 0

    def handle_event(self, machine: Optional[StateMachine], event: Optional[Event]) -> bool:
        """Tap or step the tempo on a button event; return whether it was handled."""
        if machine is None or event is None:
            return False
        controls = self.controls
        synth = controls.synth
        kind = event.type

        if kind == EventType.A_PRESSED:
            self._tap()
            return True
        if kind == EventType.B_PRESSED:
            synth.increase_bpm()
            return True
        if kind == EventType.C_PRESSED:
            synth.decrease_bpm()
            return True
        if kind == EventType.D_PRESSED:
            controls.drum_on = not controls.drum_on
            return True
        if kind == EventType.A_LONG_PRESSED:
            return True
        if kind == EventType.B_LONG_PRESSED:
            synth.increase_velocity()
            return True
        if kind == EventType.C_LONG_PRESSED:
            synth.decrease_velocity()
            return True
        if kind == EventType.D_LONG_PRESSED:
            if not controls.entry_flag:
                return False
            if not self._switch_to(machine, TrackMode.ID):
                controls.entry_flag = False
            return True
        if kind == EventType.NONE:
            controls.entry_flag = True
        return False


class TrackMode(_Mode):
    """Mode 3: switch each of the four tracks on or off."""

    ID: ClassVar[int] = 3
    name: ClassVar[str] = "TrackMode"

    def on_enter(self) -> None:
        """Log the entry."""
        super().on_enter()

    def on_exit(self) -> None:
        """Switch every track off."""
        _log.info("exit %s", self.name)
        self.controls.tracks[:] = [False] * len(self.controls.tracks)

    _TOGGLES: ClassVar[dict[EventType, int]] = {
        EventType.A_PRESSED: 0,
        EventType.B_PRESSED: 1,
        EventType.C_PRESSED: 2,
        EventType.D_PRESSED: 3,
    }

    def handle_event(self, machine: Optional[StateMachine], event: Optional[Event]) -> bool:
        """Toggle tracks or switch mode on a button event; return whether it was handled."""
        if machine is None or event is None:
            return False
        controls = self.controls
        synth = controls.synth
        kind = event.type

        track = self._TOGGLES.get(kind)
        if track is not None:
            controls.tracks[track] = not controls.tracks[track]
            return True
        if kind == EventType.A_LONG_PRESSED:
            return True
        if kind == EventType.B_LONG_PRESSED:
            synth.decrease_velocity()
            return True
        if kind == EventType.C_LONG_PRESSED:
            synth.increase_velocity()
            return True
        if kind == EventType.D_LONG_PRESSED:
            if not controls.entry_flag:
                return False
            self._switch_to(machine, AuditionMode.ID)
            return True
        if kind == EventType.NONE:
            controls.entry_flag = True
        return False


class ErrorState(State):
    """The state the machine falls into on an error; it accepts every event."""

    ID: ClassVar[int] = 100
    name: ClassVar[str] = "Error"

    def __init__(self) -> None:
        self.error_code = 0
        self.error_message = "unknown error"

    def set_error(self, code: int, message: str) -> None:
        """Record the error being reported."""
        self.error_code = code
        self.error_message = message

    def handle_event(self, machine: Optional[StateMachine], event: Optional[Event]) -> bool:
        """Accept any event given together with a machine."""
        return machine is not None and event is not None