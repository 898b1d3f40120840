"""Sample chord and drum tracks."""

from __future__ import annotations

from collections.abc import Iterable

from .definitions import (
    BPM_DEFAULT,
    BPM_STEP,
    NOTE_C2,
    NOTE_D2,
    NOTE_FS2,
    MusicData,
    OneNote,
)

KICK = 36
SNARE = 38
CLOSED_HI_HAT = 42


def _chord(channel: int, pitches: Iterable[int], index: int, delay: int) -> MusicData:
    return MusicData(
        channel=channel,
        notes=tuple(OneNote(pitch) for pitch in pitches),
        index=index,
        delay=delay,
    )


def _track(channel: int, steps: Iterable[tuple[Iterable[int], int]]) -> tuple[MusicData, ...]:
    return tuple(
        _chord(channel, pitches, index, delay)
        for index, (pitches, delay) in enumerate(steps)
    )


_SEVENTH_CHORDS = (
    ((64, 67, 71, 74), 1000),
    ((65, 69, 72, 76), 1000),
    ((62, 65, 69, 72), 1000),
    ((60, 64, 67, 71), 1000),
)

MULTITRACK_CHORDS = _track(0, _SEVENTH_CHORDS)

MULTITRACK_DRUMS = _track(
    9,
    (
        ((KICK,), 167),
        ((CLOSED_HI_HAT,), 137),
        ((KICK,), 197),
        ((SNARE,), 167),
        ((CLOSED_HI_HAT,), 167),
        ((KICK,), 167),
        ((CLOSED_HI_HAT,), 167),
        ((KICK,), 167),
        ((CLOSED_HI_HAT,), 167),
        ((CLOSED_HI_HAT,), 167),
        ((SNARE,), 167),
        ((CLOSED_HI_HAT,), 167),
        ((KICK,), 200),
        ((CLOSED_HI_HAT,), 100),
        ((SNARE,), 600),
        ((CLOSED_HI_HAT,), 100),
        ((KICK,), 100),
        ((CLOSED_HI_HAT,), 100),
        ((KICK,), 300),
        ((SNARE,), 400),
        ((CLOSED_HI_HAT,), 100),
    ),
)

MODE_CHORDS = _track(5, _SEVENTH_CHORDS)

MODE_LOW_CHORDS = _track(
    2,
    (
        ((48, 52, 55, 59), 1000),
        ((50, 53, 57, 62), 1000),
        ((45, 50, 55, 59), 1000),
        ((43, 48, 52, 55), 1000),
    ),
)

CHANNEL_1_CHORD = _chord(9, (NOTE_C2, NOTE_FS2), 0, BPM_DEFAULT + BPM_STEP)
CHANNEL_2_CHORD = _chord(9, (NOTE_FS2,), 1, BPM_DEFAULT - BPM_STEP)
CHANNEL_3_CHORD = _chord(9, (NOTE_D2, NOTE_FS2), 2, BPM_DEFAULT - BPM_STEP)
CHANNEL_4_CHORD = _chord(9, (NOTE_FS2,), 3, BPM_DEFAULT + BPM_STEP)

MODE_DRUM_CHORDS = (CHANNEL_1_CHORD, CHANNEL_2_CHORD, CHANNEL_3_CHORD, CHANNEL_4_CHORD)


def track_duration(track: Iterable[MusicData]) -> int:
    """Return the total time of a track in milliseconds."""
    return sum(step.delay for step in track)