"""Version information for neo-logout."""

__version__ = "0.1.0"
