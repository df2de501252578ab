"""hilite: command line multicolor regexp highlighter."""

__version__ = "0.3.0"
