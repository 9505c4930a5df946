"""Parsers that recognise responses, URCs and prompts in AT device output."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Union

from .errors import CmsError, ConnectionFailure, ErrorKind, InternalError

# Codes from 3GPP TS 27.007 used where the device gives no numeric code.
_CME_NOT_ALLOWED = 3
_CME_UNKNOWN = 100

_ASCII_WHITESPACE = b" \t\n\r\x0c"
_MULTISPACE = b" \t\r\n"
_DIGITS = re.compile(rb"[0-9]+")

BytesLike = Union[bytes, bytearray, memoryview]


class ParseIncomplete(Exception):
    """The input may match once more data has arrived."""


class NoMatch(Exception):
    """The input does not match."""


class DigestKind(Enum):
    """What a piece of device output was recognised as."""

    NONE = auto()
    URC = auto()
    RESPONSE = auto()
    PROMPT = auto()


@dataclass(frozen=True)
class DigestResult:
    """The outcome of digesting device output.

    ``payload`` holds the URC or response bytes, the ``InternalError`` of an
    error response, the prompt character as an integer, or None.
    """

    kind: DigestKind
    payload: object = None

    @classmethod
    def none(cls) -> DigestResult:
        """Nothing complete was recognised."""
        return cls(DigestKind.NONE)

    @classmethod
    def urc(cls, data: BytesLike) -> DigestResult:
        """An unsolicited result code."""
        return cls(DigestKind.URC, bytes(data))

    @classmethod
    def ok(cls, data: BytesLike) -> DigestResult:
        """A successful response with its body."""
        return cls(DigestKind.RESPONSE, bytes(data))

    @classmethod
    def error(cls, error: InternalError) -> DigestResult:
        """An error response."""
        if not isinstance(error, InternalError):
            raise TypeError("error must be an InternalError")
        return cls(DigestKind.RESPONSE, error)

    @classmethod
    def prompt(cls, char: int | bytes) -> DigestResult:
        """A prompt for data, such as ``>``."""
        if isinstance(char, (bytes, bytearray)):
            if len(char) != 1:
                raise ValueError("a prompt is a single byte")
            char = char[0]
        if not 0 <= char <= 0xFF:
            raise ValueError(f"prompt byte out of range: {char!r}")
        return cls(DigestKind.PROMPT, char)


def _as_bytes(value: str | BytesLike) -> bytes:
    if isinstance(value, str):
        return value.encode("ascii")
    return bytes(value)


def _expect_tag(buf: bytes, tag: bytes) -> None:
    """Require ``buf`` to start with ``tag``, allowing for data still to come."""
    if buf.startswith(tag):
        return
    if tag.startswith(buf):
        raise ParseIncomplete
    raise NoMatch


def _line_ending(buf: bytes) -> int:
    if buf.startswith(b"\n"):
        return 1
    if buf.startswith(b"\r\n"):
        return 2
    raise NoMatch


def trim_ascii_whitespace(data: BytesLike) -> bytes:
    """Strip ASCII whitespace from both ends."""
    return bytes(data).strip(_ASCII_WHITESPACE)


def trim_start_ascii_space(data: BytesLike) -> bytes:
    """Strip leading space characters only."""
    return bytes(data).lstrip(b" ")


def echo(buf: BytesLike) -> bytes:
    """Return the echoed command at the start of ``buf``, up to its first CRLF.

    Inputs shorter than two bytes have an empty echo. Raises NoMatch if no
    CRLF follows.
    """
    buf = bytes(buf)
    if len(buf) < 2:
        return b""
    index = buf.find(b"\r\n")
    if index < 0:
        raise NoMatch
    return buf[:index]


def take_until_including(buf: BytesLike, tag: str | BytesLike) -> tuple[bytes, bytes]:
    """Split ``buf`` at the first ``tag``, returning the data before it and the tag."""
    buf = bytes(buf)
    tag = _as_bytes(tag)
    index = buf.find(tag)
    if index < 0:
        raise NoMatch
    return buf[:index], buf[index : index + len(tag)]


def urc_helper(token: str | BytesLike) -> Callable[[BytesLike], tuple[bytes, int]]:
    """Build a parser for a URC ``\\r\\n{token}(:...)?\\r\\n``.

    The parser returns the trimmed URC and the bytes it consumed, and raises
    ParseIncomplete or NoMatch.
    """
    token = _as_bytes(token)

    def parse(buf: BytesLike) -> tuple[bytes, int]:
        buf = bytes(buf)
        le_len = _line_ending(buf)
        rest = buf[le_len:]
        _expect_tag(rest, token)
        after = rest[len(token) :]
        try:
            _expect_tag(after, b":")
            data, end = take_until_including(after[1:], b"\r\n")
            urc_len = len(token) + 1 + len(data) + len(end)
        except NoMatch:
            _expect_tag(after, b"\r\n")
            urc_len = len(token) + 2
        return trim_ascii_whitespace(rest[:urc_len]), le_len + urc_len

    return parse


def success_response(buf: BytesLike) -> tuple[DigestResult, int]:
    """Match a response ending in ``OK`` or ``CONNECT``."""
    buf = bytes(buf)
    for tag in (b"\r\nOK\r\n", b"\r\nCONNECT\r\n"):
        try:
            data, matched = take_until_including(buf, tag)
        except NoMatch:
            continue
        return DigestResult.ok(trim_ascii_whitespace(data)), len(data) + len(matched)
    raise NoMatch


def prompt_response(buf: BytesLike) -> tuple[DigestResult, int]:
    """Match a ``>`` or ``@`` prompt followed only by whitespace."""
    buf = bytes(buf)
    for prompt in b">@":
        index = buf.find(bytes([prompt]))
        if index < 0:
            continue
        rest = buf[index + 1 :]
        if rest.lstrip(_MULTISPACE):
            continue
        return DigestResult.prompt(prompt), len(buf)
    raise NoMatch


def _numeric_error(buf: bytes, token: bytes) -> tuple[int, int]:
    data, matched = take_until_including(buf, token)
    pos = len(data) + len(matched)
    rest = buf[pos:]
    stripped = rest.lstrip(_MULTISPACE)
    pos += len(rest) - len(stripped)
    digits = _DIGITS.match(stripped)
    if digits is None:
        raise NoMatch
    code = int(digits.group())
    if code > 0xFFFF:
        raise NoMatch
    pos += digits.end()
    pos += _line_ending(stripped[digits.end() :])
    return code, pos


def _generic_error(buf: bytes) -> int:
    for tag in (b"\r\nERROR\r\n", b"\r\nCOMMAND NOT SUPPORT\r\n"):
        try:
            data, matched = take_until_including(buf, tag)
        except NoMatch:
            continue
        return len(data) + len(matched)
    raise NoMatch


_CONNECTION_TAGS = (
    (b"\r\nNO CARRIER\r\n", ConnectionFailure.NO_CARRIER),
    (b"\r\nBUSY\r\n", ConnectionFailure.BUSY),
    (b"\r\nNO ANSWER\r\n", ConnectionFailure.NO_ANSWER),
    (b"\r\nNO DIALTONE\r\n", ConnectionFailure.NO_DIALTONE),
)


def _connection_error(buf: bytes) -> tuple[ConnectionFailure, int]:
    for tag, failure in _CONNECTION_TAGS:
        try:
            data, matched = take_until_including(buf, tag)
        except NoMatch:
            continue
        return failure, len(data) + len(matched)
    raise NoMatch


def error_response(buf: BytesLike) -> tuple[DigestResult, int]:
    """Match an error final result code.

    Raises ParseIncomplete when ``buf`` could still become ``\\r\\nNA\\r\\n``.
    """
    buf = bytes(buf)

    try:
        code, length = _numeric_error(buf, b"\r\n+CME ERROR:")
        return DigestResult.error(InternalError(ErrorKind.CME_ERROR, code)), length
    except NoMatch:
        pass

    try:
        code, length = _numeric_error(buf, b"\r\n+CMS ERROR:")
        error = InternalError(ErrorKind.CMS_ERROR, CmsError.from_code(code))
        return DigestResult.error(error), length
    except NoMatch:
        pass

    try:
        _, length = _numeric_error(buf, b"\r\nMODEM ERROR:")
        error = InternalError(ErrorKind.CME_ERROR, _CME_UNKNOWN)
        return DigestResult.error(error), length
    except NoMatch:
        pass

    try:
        length = _generic_error(buf)
        return DigestResult.error(InternalError(ErrorKind.ERROR)), length
    except NoMatch:
        pass

    try:
        failure, length = _connection_error(buf)
        error = InternalError(ErrorKind.CONNECTION_ERROR, failure)
        return DigestResult.error(error), length
    except NoMatch:
        pass

    # Some modems reply "NA" for a not-available error.
    tag = b"\r\nNA\r\n"
    _expect_tag(buf, tag)
    error = InternalError(ErrorKind.CME_ERROR, _CME_NOT_ALLOWED)
    return DigestResult.error(error), len(tag)