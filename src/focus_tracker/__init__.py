"""focus_tracker: a local to-do list with a countdown focus timer."""

__version__ = "0.1.0"
