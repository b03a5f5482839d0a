"""Kernel – errors, messaging ports and time, with no third-party imports."""
