"""Temperature display and logger for a pigpio-driven shift-register display."""

__version__ = "0.1.0"
__all__ = ["cli", "model", "pi", "segment_display", "shift_register"]