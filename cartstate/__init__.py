"""Client-side shopping cart state container."""

__version__ = "0.1.0"
