"""appdoc: PDF summaries of investment product applications."""

__version__ = "0.1.0"
