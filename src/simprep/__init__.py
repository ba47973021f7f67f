"""simprep - Tversky similarity matrices for SimSpread-style prediction."""

__version__ = "0.1.0"
