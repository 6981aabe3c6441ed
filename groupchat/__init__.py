"""Group chat backend: user administration, JWT auth, groups and messaging."""

__all__ = ["__version__"]

__version__ = "0.1.0"
