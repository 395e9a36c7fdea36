"""A two-player terminal shooter set in the trench of a battle station."""

__version__ = "0.1.0"