"""Helpers for shell commands, files and Android/iOS build environments."""

__version__ = "0.1.0"