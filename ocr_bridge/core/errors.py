"""Error taxonomy for the OCR channel bridge."""

from enum import Enum
from typing import Any, Optional


class ErrorCode(str, Enum):
    """Closed set of failure kinds reported through the channel."""
    BAD_ARGS = "bad_args"
    NOT_FOUND = "not_found"
    VISION_ERROR = "vision_error"
    METHOD_NOT_IMPLEMENTED = "method_not_implemented"


class OCRBridgeError(Exception):
    """Base class for all bridge errors."""


class PlatformChannelError(OCRBridgeError):
    """Error reply carried back through a method channel.

    ``code`` is usually an :class:`ErrorCode` value, but replies decoded from
    the wire keep whatever string the host sent.
    """

    def __init__(self, code: str, message: str = "", details: Any = None):
        if isinstance(code, ErrorCode):
            code = code.value
        super().__init__(f"{code}: {message}" if message else code)
        self.code = code
        self.message = message
        self.details = details

    def __repr__(self) -> str:
        return (f"PlatformChannelError(code={self.code!r}, message={self.message!r}, "
                f"details={self.details!r})")


class MethodNotImplementedError(OCRBridgeError):
    """The channel has no handler for the requested method."""

    code = ErrorCode.METHOD_NOT_IMPLEMENTED.value

    def __init__(self, method: Optional[str] = None, channel: Optional[str] = None):
        self.method = method
        self.channel = channel
        where = f" on channel {channel}" if channel else ""
        super().__init__(f"No implementation found for method {method}{where}")


class CodecError(OCRBridgeError, ValueError):
    """A message or envelope could not be encoded or decoded."""


class UnknownChannelError(OCRBridgeError, KeyError):
    """No channel is registered under the given name."""

    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Unknown channel: {self.name}"


class EngineUnavailableError(OCRBridgeError):
    """The recognition backend could not be loaded."""


class ChannelTransportError(OCRBridgeError):
    """The remote host could not be reached or replied with garbage."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
