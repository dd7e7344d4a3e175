"""Parametric open-top hollow box generator for 3D printing."""

__version__ = "0.1.0"
