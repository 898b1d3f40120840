# sam2695

Building blocks for driving a SAM2695 General MIDI synthesizer from Python.

The package builds the MIDI byte messages the chip understands and writes
them to any object with a `write(bytes)` method, such as an open serial port
or an `io.BytesIO`. It also provides debounced button handling, a small
event-driven state machine, and the playing modes of a four-button device.

The package has no dependencies outside the standard library.

## Modules

- `sam2695.definitions`: MIDI constants (status bytes, BPM and velocity
  limits, baud rates), the `Instrument` enumeration of General MIDI programs
  (`Instrument.GRAND_PIANO_1` to `Instrument.GUNSHOT`), the `NOTES` table and
  `note_number(name)` (`note_number("C4")` is 60, and `"F#2"` and `"FS2"`
  both give 42; an unknown name raises `ValueError`). It also defines the
  frozen `OneNote` and `MusicData` records. A `MusicData` chord holds at most
  four notes, and `MusicData.active_pitches()` lists the pitches of the notes
  that are switched on.
- `sam2695.events`: `EventType` (presses, long presses and releases of
  buttons A to D) and `Event`, a pooled event record with `type`,
  `timestamp` and `in_use`.
- `sam2695.button`: `ButtonState` and `Button`. A `Button` takes a `read`
  callable for the pin level (falsy when pressed) and a `clock` callable in
  milliseconds. Call `Button.update()` regularly. Presses are debounced over
  50 ms. A press held for 1000 ms is a long press, and a shorter one is a
  short press when released. `Button.take_events()` returns the `EventType`s
  flagged since the last call and clears them.
- `sam2695.synth`: `Synth`, which sends bank select and program change
  (`set_instrument`), `note_on`, `note_off`, `all_notes_off`, `set_volume`
  and `play_chord`. It keeps the default `pitch` (60, stepped between B0 and
  C8) and the `velocity` (90). The velocity is stepped by 10 within 0..127
  and applied as the volume of all 16 channels. It also keeps the `bpm`
  (120), which is always clamped to 40..240.
- `sam2695.music`: sample chord and drum tracks (`MULTITRACK_CHORDS`,
  `MULTITRACK_DRUMS`, `MODE_CHORDS`, `MODE_LOW_CHORDS`, `MODE_DRUM_CHORDS`).
  `track_duration(track)` gives the sum of a track's delays in milliseconds.
- `sam2695.machine`: the abstract `State`, and `StateMachine`, which has
  `init`, `handle_event`, `change_state`, `go_to_previous_state`,
  `handle_error` and a pool of three events (`get_event`, `recycle_event`,
  `reset`). It also defines `StateManager`, a registry of states by ID
  (1 to 9) shared through `StateManager.get_instance()`.
- `sam2695.modes`: `Controls`, the settings the modes share, and four
  states:
  - `AuditionMode` (ID 1) steps through instruments and pitches.
  - `BpmMode` (ID 2) sets the tempo by four taps within two seconds, or by
    steps.
  - `TrackMode` (ID 3) toggles four track switches.
  - `ErrorState` (ID 100).

  A long press of D moves from mode 1 to 2 to 3 and back to 1.

## Example

```python
import io

from sam2695.definitions import Instrument, note_number
from sam2695.synth import Synth

port = io.BytesIO()
synth = Synth(port)
synth.set_instrument(0, 0, Instrument.VIOLIN)
synth.note_on(0, note_number("C4"), 100)
synth.note_off(0, note_number("C4"))
print(port.getvalue().hex(" "))  # b0 00 00 c0 28 90 3c 64 80 3c 00
```

Driving the modes from events:

```python
import io

from sam2695.events import EventType
from sam2695.machine import StateMachine, StateManager
from sam2695.modes import AuditionMode, BpmMode, Controls, ErrorState, TrackMode
from sam2695.synth import Synth

controls = Controls(synth=Synth(io.BytesIO()), manager=StateManager())
audition = AuditionMode(controls)
for state in (audition, BpmMode(controls), TrackMode(controls)):
    controls.manager.register_state(state)

machine = StateMachine()
machine.init(audition, ErrorState())

event = machine.get_event(EventType.D_LONG_PRESSED)
machine.handle_event(event)
machine.recycle_event(event)
print(machine.current_state.name)  # BpmMode
```

Entering and leaving states and registering them are logged through the
standard `logging` module.

## What it does not do

The package does not open serial ports or read hardware pins. You supply the
port object and the `read` and `clock` callables. It has no command-line
program and no main loop that polls buttons. It also has no scheduler that
plays the sample tracks in time. Those are left to the application that uses
it.

## Tests

The test suite uses pytest, which the `test` extra installs.