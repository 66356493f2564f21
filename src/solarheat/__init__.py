"""Solar thermal water heating time calculator."""

from .core.integrator import InvalidParameterError, simulate

__version__ = "1.0.0"

__all__ = [
    "InvalidParameterError",
    "simulate",
]
