"""Error types reported by AT devices and by the AT client."""

from __future__ import annotations

from enum import Enum, IntEnum, auto


def _debug_name(value: object) -> str:
    """Render a value the way error messages show their payload."""
    if isinstance(value, Enum):
        return "".join(part.capitalize() for part in value.name.split("_"))
    if isinstance(value, (bytes, bytearray)):
        return repr(list(value))
    return repr(value)


class CmsError(IntEnum):
    """Message service errors as defined in 3GPP TS 27.005 section 3.2.5."""

    ME_FAILURE = 300
    SMS_SERVICE_RESERVED = 301
    NOT_ALLOWED = 302
    NOT_SUPPORTED = 303
    INVALID_PDU_PARAMETER = 304
    INVALID_TEXT_PARAMETER = 305
    SIM_NOT_INSERTED = 310
    SIM_PIN = 311
    PH_SIM_PIN = 312
    SIM_FAILURE = 313
    SIM_BUSY = 314
    SIM_WRONG = 315
    SIM_PUK = 316
    SIM_PIN2 = 317
    SIM_PUK2 = 318
    MEMORY_FAILURE = 320
    INVALID_INDEX = 321
    MEMORY_FULL = 322
    SMSC_ADDRESS_UNKNOWN = 330
    NO_NETWORK = 331
    NETWORK_TIMEOUT = 332
    NO_CNMA_ACK_EXPECTED = 340
    UNKNOWN = 500

    @classmethod
    def from_code(cls, code: int) -> CmsError:
        """Map a numeric error code; unrecognised codes become UNKNOWN."""
        try:
            return cls(code)
        except ValueError:
            return cls.UNKNOWN

    @classmethod
    def from_msg(cls, msg: bytes) -> CmsError:
        """Map a verbose error message; unrecognised messages become UNKNOWN."""
        return _CMS_FROM_MSG.get(bytes(msg), cls.UNKNOWN)

    def __str__(self) -> str:
        return _CMS_TEXT[self]


_CMS_TEXT = {
    CmsError.ME_FAILURE: "ME failure",
    CmsError.SMS_SERVICE_RESERVED: "SMS service reserved",
    CmsError.NOT_ALLOWED: "Operation not allowed",
    CmsError.NOT_SUPPORTED: "Operation not supported",
    CmsError.INVALID_PDU_PARAMETER: "Invalid PDU mode parameter",
    CmsError.INVALID_TEXT_PARAMETER: "Invalid text mode parameter",
    CmsError.SIM_NOT_INSERTED: "SIM not inserted",
    CmsError.SIM_PIN: "SIM PIN required",
    CmsError.PH_SIM_PIN: "PH-SIM PIN required",
    CmsError.SIM_FAILURE: "SIM failure",
    CmsError.SIM_BUSY: "SIM busy",
    CmsError.SIM_WRONG: "SIM wrong",
    CmsError.SIM_PUK: "SIM PUK required",
    CmsError.SIM_PIN2: "SIM PIN2 required",
    CmsError.SIM_PUK2: "SIM PUK2 required",
    CmsError.MEMORY_FAILURE: "Memory failure",
    CmsError.INVALID_INDEX: "Invalid index",
    CmsError.MEMORY_FULL: "Memory full",
    CmsError.SMSC_ADDRESS_UNKNOWN: "SMSC address unknown",
    CmsError.NO_NETWORK: "No network",
    CmsError.NETWORK_TIMEOUT: "Network timeout",
    CmsError.NO_CNMA_ACK_EXPECTED: "No CNMA acknowledgement expected",
    CmsError.UNKNOWN: "Unknown",
}

_CMS_FROM_MSG = {
    b"ME failure": CmsError.ME_FAILURE,
    b"SMS service reserved": CmsError.SMS_SERVICE_RESERVED,
    b"Operation not allowed": CmsError.NOT_ALLOWED,
    b"Operation not supported": CmsError.NOT_SUPPORTED,
    b"Invalid PDU mode parameter": CmsError.INVALID_PDU_PARAMETER,
    b"Invalid text mode parameter": CmsError.INVALID_TEXT_PARAMETER,
    b"SIM not inserted": CmsError.SIM_NOT_INSERTED,
    b"SIM PIN required": CmsError.SIM_PIN,
    b"SIM failure": CmsError.SIM_FAILURE,
    b"SIM busy": CmsError.SIM_BUSY,
    b"SIM wrong": CmsError.SIM_WRONG,
    b"SIM PUK required": CmsError.SIM_PUK,
    b"Memory failure": CmsError.MEMORY_FAILURE,
    b"Invalid index": CmsError.INVALID_INDEX,
    b"Memory full": CmsError.MEMORY_FULL,
    b"SMSC address unknown": CmsError.SMSC_ADDRESS_UNKNOWN,
    b"No network": CmsError.NO_NETWORK,
    b"Network timeout": CmsError.NETWORK_TIMEOUT,
}


class ConnectionFailure(IntEnum):
    """Final result codes reporting a failed connection."""

    UNKNOWN = 0
    NO_CARRIER = 1
    NO_DIALTONE = 2
    BUSY = 3
    NO_ANSWER = 4

    @classmethod
    def from_code(cls, code: int) -> ConnectionFailure:
        """Map a numeric code; unrecognised codes become UNKNOWN."""
        try:
            return cls(code)
        except ValueError:
            return cls.UNKNOWN

    def __str__(self) -> str:
        return _CONNECTION_TEXT[self]


_CONNECTION_TEXT = {
    ConnectionFailure.UNKNOWN: "Unknown",
    ConnectionFailure.NO_CARRIER: "No carrier",
    ConnectionFailure.NO_DIALTONE: "No dialtone",
    ConnectionFailure.BUSY: "Busy",
    ConnectionFailure.NO_ANSWER: "No answer",
}


class ErrorKind(Enum):
    """The kinds of failure an AT exchange can end in."""

    READ = auto()
    WRITE = auto()
    TIMEOUT = auto()
    INVALID_RESPONSE = auto()
    ABORTED = auto()
    PARSE = auto()
    ERROR = auto()
    CME_ERROR = auto()
    CMS_ERROR = auto()
    CONNECTION_ERROR = auto()
    CUSTOM = auto()


_PLAIN_TEXT = {
    ErrorKind.READ: "Serial read error",
    ErrorKind.WRITE: "Serial write error",
    ErrorKind.TIMEOUT: "Timed out while waiting for a response",
    ErrorKind.INVALID_RESPONSE: "Invalid response from module",
    ErrorKind.ABORTED: "Command was aborted",
    ErrorKind.PARSE: "Failed to parse received response",
    ErrorKind.ERROR: "Generic error response",
}

_DETAIL_PREFIX = {
    ErrorKind.CME_ERROR: "GSM Equipment related error",
    ErrorKind.CMS_ERROR: "GSM Network related error",
    ErrorKind.CONNECTION_ERROR: "Connection Error",
}


def _check_detail(kind: ErrorKind, detail: object, custom_payload: bool) -> None:
    if kind in _PLAIN_TEXT:
        if detail is not None:
            raise ValueError(f"{kind.name} carries no detail")
    elif kind is ErrorKind.CMS_ERROR:
        if not isinstance(detail, CmsError):
            raise ValueError("CMS_ERROR needs a CmsError detail")
    elif kind is ErrorKind.CONNECTION_ERROR:
        if not isinstance(detail, ConnectionFailure):
            raise ValueError("CONNECTION_ERROR needs a ConnectionFailure detail")
    elif kind is ErrorKind.CME_ERROR:
        if detail is None:
            raise ValueError("CME_ERROR needs a detail")
    elif kind is ErrorKind.CUSTOM:
        if custom_payload and not isinstance(detail, (bytes, bytearray)):
            raise ValueError("CUSTOM needs the matched bytes as detail")
        if not custom_payload and detail is not None:
            raise ValueError("CUSTOM carries no detail")


class InternalError:
    """An error response as recognised while digesting device output."""

    __slots__ = ("kind", "detail")

    def __init__(self, kind: ErrorKind, detail: object = None) -> None:
        _check_detail(kind, detail, custom_payload=True)
        if isinstance(detail, bytearray):
            detail = bytes(detail)
        self.kind = kind
        self.detail = detail

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, InternalError):
            return NotImplemented
        return (self.kind, self.detail) == (other.kind, other.detail)

    def __hash__(self) -> int:
        return hash((self.kind, self.detail))

    def __repr__(self) -> str:
        return f"InternalError({self.kind.name}, {self.detail!r})"

    def __str__(self) -> str:
        if self.kind in _PLAIN_TEXT:
            return _PLAIN_TEXT[self.kind]
        if self.kind is ErrorKind.CUSTOM:
            return f"Custom error match: {_debug_name(self.detail)}"
        return f"{_DETAIL_PREFIX[self.kind]}: {_debug_name(self.detail)}"


class AtError(Exception):
    """Raised when an AT command fails."""

    def __init__(self, kind: ErrorKind, detail: object = None) -> None:
        _check_detail(kind, detail, custom_payload=False)
        self.kind = kind
        self.detail = detail
        super().__init__(str(self))

    @classmethod
    def from_internal(cls, internal: InternalError) -> AtError:
        """Convert an internal error; custom matches lose their payload."""
        if internal.kind is ErrorKind.CUSTOM:
            return cls(ErrorKind.CUSTOM)
        return cls(internal.kind, internal.detail)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AtError):
            return NotImplemented
        return (self.kind, self.detail) == (other.kind, other.detail)

    def __hash__(self) -> int:
        return hash((self.kind, self.detail))

    def __repr__(self) -> str:
        return f"AtError({self.kind.name}, {self.detail!r})"

    def __str__(self) -> str:
        if self.kind in _PLAIN_TEXT:
            return _PLAIN_TEXT[self.kind]
        if self.kind is ErrorKind.CUSTOM:
            return "Custom error response"
        return f"{_DETAIL_PREFIX[self.kind]}: {_debug_name(self.detail)}"