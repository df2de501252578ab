class HiliteError(Exception):
    """Base class for errors reported to the user."""


class PatternError(HiliteError):
    """A pattern given on the command line does not compile."""

    def __init__(self, pattern: str, message: str = "") -> None:
        self.pattern = pattern
        super().__init__(message or f"Invalid pattern: {pattern!r}")


class ConfigError(HiliteError):
    """The configuration file is missing, malformed or holds bad values."""


class InputError(HiliteError):
    """Reading a line from the input stream failed."""
