"""Drive a SAM2695 MIDI synthesizer: MIDI messages, buttons, tracks and modes."""

__version__ = "0.1.0"

__all__ = ["button", "definitions", "events", "machine", "modes", "music", "synth"]