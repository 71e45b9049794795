"""
Exceptions raised by snakeli.
"""


class ConfigurationError(ValueError):
    """Invalid flag, config file entry or board geometry."""


class TerminalIOError(OSError):
    """Writing to or querying the terminal failed."""
