"""Parsing of AT command responses, URCs and prompts, with the matching error model."""

__version__ = "0.1.0"

__all__ = ["config", "digester", "errors", "helpers", "lengths", "parser"]