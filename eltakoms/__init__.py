"""Eltako Multisensor telegram decoder and logger."""

__version__ = "0.1.0"
