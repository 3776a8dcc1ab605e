"""Arena: AI rock-paper-scissors matches with a pari-mutuel spectator pool."""

__version__ = "0.1.0"
__author__ = "Arena Team"

__all__ = ["__version__", "__author__"]
