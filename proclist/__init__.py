"""List running processes with their threads, memory use and CPU times."""

__version__ = "0.1.0"
__all__ = ["__version__"]