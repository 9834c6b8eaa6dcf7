"""Live departure board for Swiss public transport stations."""

__version__ = "0.1.0"
