"""Synthesizer control models: parameter ramps, linked list, piano keyboard, parameter controls, status bar and colour palettes."""

__version__ = "0.1.0"