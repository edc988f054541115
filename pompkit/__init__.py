"""Numerical building blocks for partially observed Markov process models."""

__version__ = "0.1.0"