"""Core value types and command-line argument handling for a multichain light client."""

__version__ = "0.8.5"