"""MIDI constants, note numbers, General MIDI instruments and chord data."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

MIDI_SERIAL_BAUD_RATE = 31250
USB_SERIAL_BAUD_RATE = 115200

MIDI_COMMAND_ON = 0x90
MIDI_COMMAND_OFF = 0x80
MIDI_CMD_CONTROL_CHANGE = 0xB0
MIDI_CMD_PROGRAM_CHANGE = 0xC0

BPM_DEFAULT = 120
BPM_MIN = 40
BPM_MAX = 240
BPM_STEP = 10

VELOCITY_MIN = 0
VELOCITY_MAX = 127
VELOCITY_STEP = 10
VELOCITY_DEFAULT = 64

BASIC_TIME = 60000  # milliseconds in one minute

QUARTER_NOTE = 0
EIGHTH_NOTE = 1
SIXTEENTH_NOTE = 2

BEATS_BAR_DEFAULT = 4
BEATS_BAR_2 = 2
BEATS_BAR_3 = 3
BEATS_BAR_4 = 4

NOTE_COUNT_DEFAULT = 4
NOTE_COUNT_MIN = 1
NOTE_COUNT_MAX = 16

CHANNELS = range(16)
DRUM_CHANNEL = 9

REST = 0
NOTE_B0 = 23
NOTE_C2 = 36
NOTE_D2 = 38
NOTE_FS2 = 42
NOTE_C4 = 60
NOTE_C8 = 108
NOTE_DS8 = 111

_PITCH_CLASSES = ("C", "CS", "D", "DS", "E", "F", "FS", "G", "GS", "A", "AS", "B")

NOTES: dict[str, int] = {"REST": REST, "B0": NOTE_B0}
NOTES.update(
    {
        f"{pitch_class}{octave}": 12 * (octave + 1) + offset
        for octave in range(1, 9)
        for offset, pitch_class in enumerate(_PITCH_CLASSES)
        if 12 * (octave + 1) + offset <= NOTE_DS8
    }
)


def note_number(name: str) -> int:
    """Return the MIDI number of a note name such as ``"C4"``, ``"FS2"`` or ``"F#2"``."""
    key = name.strip().upper().replace("#", "S")
    try:
        return NOTES[key]
    except KeyError:
        raise ValueError(f"unknown note name: {name!r}") from None


_INSTRUMENT_NAMES = (
    "GRAND_PIANO_1", "BRIGHT_PIANO_2", "EL_GRD_PIANO_3", "HONKY_TONK_PIANO",
    "EL_PIANO_1", "EL_PIANO_2", "HARPSICHORD", "CLAVI",
    "CELESTA", "GLOCKENSPIEL", "MUSIC_BOX", "VIBRAPHONE",
    "MARIMBA", "XYLOPHONE", "TUBULAR_BELLS", "SANTUR",
    "DRAWBAR_ORGAN", "PERCUSSIVE_ORGAN", "ROCK_ORGAN", "CHURCH_ORGAN",
    "REED_ORGAN", "ACCORDION_FRENCH", "HARMONICA", "TANGO_ACCORDION",
    "AC_GUITAR_NYLON", "AC_GUITAR_STEEL", "AC_GUITAR_JAZZ", "AC_GUITAR_CLEAN",
    "AC_GUITAR_MUTED", "OVERDRIVEN_GUITAR", "DISTORTION_GUITAR", "GUITAR_HARMONICS",
    "ACOUSTIC_BASS", "FINGER_BASS", "PICKED_BASS", "FRETLESS_BASS",
    "SLAP_BASS_1", "SLAP_BASS_2", "SYNTH_BASS_1", "SYNTH_BASS_2",
    "VIOLIN", "VIOLA", "CELLO", "CONTRABASS",
    "TREMOLO_STRINGS", "PIZZICATO_STRINGS", "ORCHESTRAL_HARP", "TIMPANI",
    "STRING_ENSEMBLE_1", "STRING_ENSEMBLE_2", "SYNTH_STRINGS_1", "SYNTH_STRINGS_2",
    "CHOIR_AAHS", "VOICE_OOHS", "SYNTH_VOICE", "ORCHESTRA_HIT",
    "TRUMPET", "TROMBONE", "TUBA", "MUTED_TRUMPET",
    "FRENCH_HORN", "BRASS_SECTION", "SYNTH_BRASS_1", "SYNTH_BRASS_2",
    "SOPRANO_SAX", "ALTO_SAX", "TENOR_SAX", "BARITONE_SAX",
    "OBOE", "ENGLISH_HORN", "BASSOON", "CLARINET",
    "PICCOLO", "FLUTE", "RECORDER", "PAN_FLUTE",
    "BLOWN_BOTTLE", "SHAKUHACHI", "WHISTLE", "OCARINA",
    "LEAD_1_SQUARE", "LEAD_2_SAWTOOTH", "LEAD_3_CALLIOPE", "LEAD_4_CHIFF",
    "LEAD_5_CHARANG", "LEAD_6_VOICE", "LEAD_7_FIFTHS", "LEAD_8_BASS_LEAD",
    "PAD_1_FANTASIA", "PAD_2_WARM", "PAD_3_POLY_SYNTH", "PAD_4_CHOIR",
    "PAD_5_BOWED", "PAD_6_METALLIC", "PAD_7_HALO", "PAD_8_SWEEP",
    "FX_1_RAIN", "FX_2_SOUNDTRACK", "FX_3_CRYSTAL", "FX_4_ATMOSPHERE",
    "FX_5_BRIGHTNESS", "FX_6_GOBLINS", "FX_7_ECHOES", "FX_8_SCI_FI",
    "SITAR", "BANJO", "SHAMISEN", "KOTO",
    "KALIMBA", "BAG_PIPE", "FIDDLE", "SHANAI",
    "TINKLE_BELL", "AGOGO", "STEEL_DRUMS", "WOODBLOCK",
    "TAIKO_DRUM", "MELODIC_TOM", "SYNTH_DRUM", "REVERSE_CYMBAL",
    "GT_FRET_NOISE", "BREATH_NOISE", "SEASHORE", "BIRD_TWEET",
    "TELEPH_RING", "HELICOPTER", "APPLAUSE", "GUNSHOT",
)

Instrument = IntEnum("Instrument", _INSTRUMENT_NAMES, start=0, module=__name__)
Instrument.__doc__ = "General MIDI program numbers of the synthesizer's bank 0."


@dataclass(frozen=True)
class OneNote:
    """A single note of a chord: its pitch and whether it sounds."""

    pitch: int
    is_on: bool = True


@dataclass(frozen=True)
class MusicData:
    """A chord to play on one channel, with its place in a track and its duration."""

    channel: int
    notes: tuple[OneNote, ...] = field(default_factory=tuple)
    velocity: int = VELOCITY_DEFAULT
    index: int = 0
    delay: int = 0

    def __post_init__(self) -> None:
        notes = tuple(self.notes)
        if len(notes) > NOTE_COUNT_DEFAULT:
            raise ValueError(
                f"a chord holds at most {NOTE_COUNT_DEFAULT} notes, got {len(notes)}"
            )
        object.__setattr__(self, "notes", notes)

    def active_pitches(self) -> list[int]:
        """Return the pitches of the notes that are switched on, in order."""
        return [note.pitch for note in self.notes if note.is_on]