"""League import and grid answer engine."""

__version__ = "0.1.0"
