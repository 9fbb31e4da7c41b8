"""Track progress of one or more tasks and render it on the terminal."""

__version__ = "0.1.0"