"""Route textual commands, including multi-word subcommands, to registered handlers."""

__version__ = "0.1.0"
