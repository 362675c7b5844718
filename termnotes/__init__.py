"""termnotes: daily Markdown tasks and notes from the terminal."""

__version__ = "0.1.0"
