"""MIDI command sender for the SAM2695 synthesizer chip."""

from __future__ import annotations

from typing import Protocol

from .definitions import (
    BPM_DEFAULT,
    BPM_MAX,
    BPM_MIN,
    BPM_STEP,
    CHANNELS,
    MIDI_CMD_CONTROL_CHANGE,
    MIDI_CMD_PROGRAM_CHANGE,
    MIDI_COMMAND_OFF,
    MIDI_COMMAND_ON,
    NOTE_B0,
    NOTE_C4,
    NOTE_C8,
    VELOCITY_MAX,
    VELOCITY_MIN,
    VELOCITY_STEP,
    MusicData,
)

_CONTROLLER_BANK_SELECT = 0x00
_CONTROLLER_VOLUME = 0x07
_CONTROLLER_ALL_NOTES_OFF = 0x7B

DEFAULT_VELOCITY = 90


class Port(Protocol):
    """Anything the MIDI bytes can be written to, such as an open serial port."""

    def write(self, data: bytes) -> object: ...


def _status(command: int, channel: int) -> int:
    return command | (channel & 0x0F)


class Synth:
    """Sends MIDI messages to the synthesizer and keeps its play settings.

    ``pitch`` is the default note played, ``velocity`` the volume applied to
    every channel when it is stepped, and ``bpm`` the tempo, always kept
    between ``BPM_MIN`` and ``BPM_MAX``.
    """

    def __init__(self, port: Port) -> None:
        self.port = port
        self.pitch = NOTE_C4
        self.velocity = DEFAULT_VELOCITY
        self._bpm = BPM_DEFAULT

    @property
    def bpm(self) -> int:
        """Tempo in beats per minute."""
        return self._bpm

    @bpm.setter
    def bpm(self, value: int) -> None:
        self._bpm = min(max(value, BPM_MIN), BPM_MAX)

    def _send(self, *message: int) -> None:
        self.port.write(bytes(message))

    def set_instrument(self, bank: int, channel: int, value: int) -> None:
        """Select ``bank`` and then program ``value`` on ``channel``."""
        self._send(_status(MIDI_CMD_CONTROL_CHANGE, channel), _CONTROLLER_BANK_SELECT, bank)
        self._send(_status(MIDI_CMD_PROGRAM_CHANGE, channel), value)

    def note_on(self, channel: int, pitch: int, velocity: int) -> None:
        """Start ``pitch`` on ``channel`` at ``velocity``."""
        self._send(_status(MIDI_COMMAND_ON, channel), pitch, velocity)

    def note_off(self, channel: int, pitch: int) -> None:
        """Stop ``pitch`` on ``channel``."""
        self._send(_status(MIDI_COMMAND_OFF, channel), pitch, 0x00)

    def all_notes_off(self, channel: int) -> None:
        """Stop every note sounding on ``channel``."""
        self._send(_status(MIDI_CMD_CONTROL_CHANGE, channel), _CONTROLLER_ALL_NOTES_OFF, 0x00)

    def play_chord(self, chord: MusicData) -> None:
        """Start every switched-on note of ``chord`` on its channel."""
        for pitch in chord.active_pitches():
            self.note_on(chord.channel, pitch, chord.velocity)

    def set_volume(self, channel: int, level: int) -> None:
        """Set the volume controller of ``channel`` to ``level``."""
        self._send(_status(MIDI_CMD_CONTROL_CHANGE, channel), _CONTROLLER_VOLUME, level)

    def increase_pitch(self) -> None:
        """Raise the default pitch by a semitone, up to C8."""
        self.pitch = min(self.pitch + 1, NOTE_C8)

    def decrease_pitch(self) -> None:
        """Lower the default pitch by a semitone, down to B0."""
        self.pitch = max(self.pitch - 1, NOTE_B0)

    def _apply_velocity(self) -> None:
        for channel in CHANNELS:
            self.set_volume(channel, self.velocity)

    def increase_velocity(self) -> None:
        """Step the velocity up and apply it as the volume of every channel."""
        self.velocity = min(self.velocity + VELOCITY_STEP, VELOCITY_MAX)
        self._apply_velocity()

    def decrease_velocity(self) -> None:
        """Step the velocity down and apply it as the volume of every channel."""
        self.velocity = max(self.velocity - VELOCITY_STEP, VELOCITY_MIN)
        self._apply_velocity()

    def increase_bpm(self) -> None:
        """Raise the tempo by one step."""
        self.bpm = self._bpm + BPM_STEP

    def decrease_bpm(self) -> None:
        """Lower the tempo by one step."""
        self.bpm = self._bpm - BPM_STEP