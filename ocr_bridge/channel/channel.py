"""Named request/response method channels."""

import logging
from typing import Any, Awaitable, Callable, Optional

from ..core.errors import MethodNotImplementedError, PlatformChannelError
from .codec import JSONMethodCodec, MethodCall

logger = logging.getLogger(__name__)

MethodCallHandler = Callable[[MethodCall], Awaitable[Any]]


class MethodChannel:
    """A named channel dispatching method calls to a single handler.

    Calls are dispatched as they arrive; the channel never serializes or
    batches them.
    """

    def __init__(self, name: str, codec: Optional[JSONMethodCodec] = None):
        self.name = name
        self.codec = codec or JSONMethodCodec()
        self._handler: Optional[MethodCallHandler] = None

    @property
    def has_handler(self) -> bool:
        return self._handler is not None

    def set_method_call_handler(self, handler: Optional[MethodCallHandler]) -> None:
        """Install the handler for incoming calls; ``None`` removes it."""
        self._handler = handler

    async def handle_message(self, message: bytes) -> Optional[bytes]:
        """Decode, dispatch and encode one call.

        Args:
            message: Encoded method call

        Returns:
            Encoded reply envelope, or None if the method is not implemented
        """
        call = self.codec.decode_method_call(message)
        if self._handler is None:
            logger.warning(f"No handler on {self.name} for {call.method}")
            return None

        try:
            result = await self._handler(call)
        except MethodNotImplementedError:
            logger.info(f"{self.name}: method {call.method} not implemented")
            return None
        except PlatformChannelError as e:
            return self.codec.encode_error_envelope(e.code, e.message, e.details)
        except Exception as e:
            logger.error(f"{self.name}: handler for {call.method} failed: {e}", exc_info=True)
            return self.codec.encode_error_envelope("error", str(e), None)

        return self.codec.encode_success_envelope(result)

    async def invoke_method(self, method: str, arguments: Any = None) -> Any:
        """Call ``method`` on this channel in-process.

        Args:
            method: Method name
            arguments: Method arguments

        Returns:
            The handler's result

        Raises:
            PlatformChannelError: If the handler replied with an error
            MethodNotImplementedError: If the method is not implemented
        """
        message = self.codec.encode_method_call(MethodCall(method, arguments))
        reply = await self.handle_message(message)
        try:
            return self.codec.decode_envelope(reply)
        except MethodNotImplementedError:
            raise MethodNotImplementedError(method, self.name) from None
