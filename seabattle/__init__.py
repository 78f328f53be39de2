"""Two-player terminal battleship game played between processes over signals."""

__version__ = "0.1.0"
__all__ = ["__version__"]