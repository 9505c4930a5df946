"""Client configuration and a simple blocking timer."""

from __future__ import annotations

import time
from dataclasses import dataclass, field, replace
from typing import Callable

ResponseTimeout = Callable[[float, float], float]
"""Computes the instant (monotonic seconds) at which a response times out."""


def default_response_timeout(start: float, duration: float) -> float:
    """Return the instant a response expires: the send instant plus the timeout."""
    return start + duration


def _check_duration(name: str, value: float) -> None:
    if value < 0:
        raise ValueError(f"{name} must not be negative, got {value!r}")


@dataclass(frozen=True)
class Config:
    """Timing settings of the AT client. Durations are in seconds."""

    cmd_cooldown: float = 0.020
    tx_timeout: float = 1.000
    flush_timeout: float = 1.000
    response_timeout: ResponseTimeout = field(default=default_response_timeout)

    def __post_init__(self) -> None:
        _check_duration("cmd_cooldown", self.cmd_cooldown)
        _check_duration("tx_timeout", self.tx_timeout)
        _check_duration("flush_timeout", self.flush_timeout)
        if not callable(self.response_timeout):
            raise TypeError("response_timeout must be callable")

    def with_tx_timeout(self, duration: float) -> Config:
        """Return a copy with a new write timeout."""
        return replace(self, tx_timeout=duration)

    def with_flush_timeout(self, duration: float) -> Config:
        """Return a copy with a new flush timeout."""
        return replace(self, flush_timeout=duration)

    def with_cmd_cooldown(self, duration: float) -> Config:
        """Return a copy with a new pause between commands."""
        return replace(self, cmd_cooldown=duration)

    def with_response_timeout(self, compute: ResponseTimeout) -> Config:
        """Return a copy with a custom response-timeout computation.

        The computation is re-evaluated while waiting, so it may extend the
        deadline, for example when flow control held the device back.
        """
        return replace(self, response_timeout=compute)


class BlockingTimer:
    """A timer that expires a fixed time after it was started."""

    __slots__ = ("expires_at",)

    def __init__(self, expires_at: float) -> None:
        self.expires_at = expires_at

    @classmethod
    def after(cls, duration: float) -> BlockingTimer:
        """Start a timer expiring ``duration`` seconds from now."""
        _check_duration("duration", duration)
        return cls(time.monotonic() + duration)

    def expired(self) -> bool:
        """Tell whether the timer has run out."""
        return self.expires_at <= time.monotonic()

    def wait(self) -> None:
        """Block until the timer has run out."""
        while True:
            remaining = self.expires_at - time.monotonic()
            if remaining <= 0:
                return
            time.sleep(remaining)