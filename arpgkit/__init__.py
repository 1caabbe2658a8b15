"""Engine-independent building blocks for a 2D action RPG: colors, handles,
timers, input events, sprite and debug-shape batching, Tiled map loading and
menu/textbox UI state."""

__version__ = "0.1.0"