"""todofocus - tasks, tags and a focus countdown timer."""

__version__ = "0.1.0"
