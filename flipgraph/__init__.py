"""Random-walk search for low-rank matrix multiplication schemes over Z2."""

__version__ = "0.1.0"