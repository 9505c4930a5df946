"""A digester that splits AT device output into responses, URCs and prompts."""

from __future__ import annotations

from typing import Callable, Optional, Tuple, TypeVar

from .errors import ErrorKind, InternalError
from .parser import (
    BytesLike,
    DigestKind,
    DigestResult,
    NoMatch,
    ParseIncomplete,
    echo,
    error_response,
    prompt_response,
    success_response,
    trim_start_ascii_space,
)

T = TypeVar("T")

UrcParser = Callable[[bytes], Tuple[bytes, int]]
"""Returns a URC and its length; raises NoMatch or ParseIncomplete."""

CustomMatcher = Callable[[bytes], Tuple[bytes, int]]
"""Returns matched data and its length; raises NoMatch or ParseIncomplete."""

PromptMatcher = Callable[[bytes], Tuple[int, int]]
"""Returns a prompt byte and its length; raises NoMatch or ParseIncomplete."""


def _attempt(parser: Optional[Callable[[bytes], T]], buf: bytes) -> Optional[T]:
    """Run a parser, returning None when it does not match.

    ParseIncomplete is left to propagate.
    """
    if parser is None:
        return None
    try:
        return parser(buf)
    except NoMatch:
        return None


class AtDigester:
    """Digests output of a device speaking the basic AT standard.

    Works with or without command echo. The buffer may hold an echoed command,
    a response ending in a result code, an unsolicited result code (URC) or a
    prompt for data. ``urc_parser`` recognises the URCs the device can send.
    """

    __slots__ = ("_urc_parser", "_custom_success", "_custom_error", "_custom_prompt")

    def __init__(
        self,
        urc_parser: Optional[UrcParser] = None,
        *,
        custom_success: Optional[CustomMatcher] = None,
        custom_error: Optional[CustomMatcher] = None,
        custom_prompt: Optional[PromptMatcher] = None,
    ) -> None:
        self._urc_parser = urc_parser
        self._custom_success = custom_success
        self._custom_error = custom_error
        self._custom_prompt = custom_prompt

    def _copy(self, **changes: object) -> AtDigester:
        settings = {
            "custom_success": self._custom_success,
            "custom_error": self._custom_error,
            "custom_prompt": self._custom_prompt,
        }
        settings.update(changes)
        return AtDigester(self._urc_parser, **settings)

    def with_custom_success(self, func: CustomMatcher) -> AtDigester:
        """Return a digester that tries ``func`` before the standard success replies."""
        return self._copy(custom_success=func)

    def with_custom_error(self, func: CustomMatcher) -> AtDigester:
        """Return a digester that tries ``func`` before the standard error replies."""
        return self._copy(custom_error=func)

    def with_custom_prompt(self, func: PromptMatcher) -> AtDigester:
        """Return a digester that tries ``func`` before the standard prompts."""
        return self._copy(custom_prompt=func)

    def _match(self, buf: bytes) -> Optional[Tuple[DigestResult, int]]:
        """Try every recogniser in order; raises ParseIncomplete to wait for more."""
        urc = _attempt(self._urc_parser, buf)
        if urc is not None:
            data, length = urc
            return DigestResult.urc(data), length

        custom = _attempt(self._custom_success, buf)
        if custom is not None:
            data, length = custom
            return DigestResult.ok(data), length

        found = _attempt(success_response, buf)
        if found is not None:
            return found

        prompt = _attempt(self._custom_prompt, buf)
        if prompt is not None:
            char, length = prompt
            return DigestResult.prompt(char), length

        try:
            return prompt_response(buf)
        except (NoMatch, ParseIncomplete):
            pass

        custom = _attempt(self._custom_error, buf)
        if custom is not None:
            data, length = custom
            error = InternalError(ErrorKind.CUSTOM, bytes(data))
            return DigestResult.error(error), length

        try:
            return error_response(buf)
        except (NoMatch, ParseIncomplete):
            return None

    def digest(self, buf: BytesLike) -> Tuple[DigestResult, int]:
        """Digest ``buf`` and return the result and the number of bytes consumed."""
        data = bytes(buf)
        trimmed = trim_start_ascii_space(data)
        skipped = len(data) - len(trimmed)
        try:
            echoed = echo(trimmed)
        except NoMatch:
            echoed = b""
        body = trimmed[len(echoed) :]
        skipped += len(echoed)

        try:
            found = self._match(body)
        except ParseIncomplete:
            return DigestResult.none(), skipped
        if found is not None:
            result, length = found
            return result, skipped + length

        # Garbage between two line endings is not taken as echo; skip past it.
        if body.startswith(b"\r\n") and len(body) > 4:
            result, consumed = self.digest(body[2:])
            if result.kind is not DigestKind.NONE:
                return result, skipped + 2 + consumed

        return DigestResult.none(), skipped