"""Formatting helpers for raw device data."""

from __future__ import annotations

_ESCAPES = {
    "\t": "\\t",
    "\r": "\\r",
    "\n": "\\n",
    "\\": "\\\\",
    '"': '\\"',
    "\0": "\\0",
}


def _escape_char(ch: str) -> str:
    if ch in _ESCAPES:
        return _ESCAPES[ch]
    if not ch.isprintable():
        return f"\\u{{{ord(ch):x}}}"
    return ch


def lossy_str(data: bytes) -> str:
    """Show bytes as a quoted, escaped string if they are UTF-8, else as a byte list."""
    try:
        text = bytes(data).decode("utf-8")
    except UnicodeDecodeError:
        return repr(list(data))
    return '"' + "".join(_escape_char(ch) for ch in text) + '"'