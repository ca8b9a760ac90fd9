"""JSON method codec for channel messages."""

import json
from dataclasses import dataclass
from typing import Any, Optional

from ..core.errors import CodecError, MethodNotImplementedError, PlatformChannelError


@dataclass
class MethodCall:
    """A method invocation on a channel."""
    method: str
    arguments: Any = None


class JSONMethodCodec:
    """Encodes method calls and reply envelopes as UTF-8 JSON.

    Calls are ``{"method": name, "args": arguments}``. A success envelope is
    ``[result]`` and an error envelope is ``[code, message, details]``. An
    empty reply means the method is not implemented.
    """

    def encode_method_call(self, call: MethodCall) -> bytes:
        return self._dump({'method': call.method, 'args': call.arguments})

    def decode_method_call(self, message: bytes) -> MethodCall:
        payload = self._load(message)
        if not isinstance(payload, dict) or not isinstance(payload.get('method'), str):
            raise CodecError(f"Invalid method call: {payload!r}")
        return MethodCall(method=payload['method'], arguments=payload.get('args'))

    def encode_success_envelope(self, result: Any) -> bytes:
        return self._dump([result])

    def encode_error_envelope(self, code: str, message: Optional[str] = None,
                              details: Any = None) -> bytes:
        return self._dump([code, message, details])

    def decode_envelope(self, envelope: Optional[bytes]) -> Any:
        """Decode a reply envelope.

        Args:
            envelope: Encoded reply, or None/empty for "not implemented"

        Returns:
            The success result

        Raises:
            PlatformChannelError: For an error envelope
            MethodNotImplementedError: For an empty reply
            CodecError: If the envelope is malformed
        """
        if not envelope:
            raise MethodNotImplementedError()
        payload = self._load(envelope)
        if not isinstance(payload, list):
            raise CodecError(f"Invalid envelope: {payload!r}")
        if len(payload) == 1:
            return payload[0]
        if len(payload) == 3 and isinstance(payload[0], str):
            code, message, details = payload
            raise PlatformChannelError(code, message or "", details)
        raise CodecError(f"Invalid envelope: {payload!r}")

    def _dump(self, payload: Any) -> bytes:
        try:
            return json.dumps(payload, ensure_ascii=False).encode('utf-8')
        except (TypeError, ValueError) as e:
            raise CodecError(f"Cannot encode message: {e}") from e

    def _load(self, message: bytes) -> Any:
        try:
            return json.loads(message.decode('utf-8'))
        except (UnicodeDecodeError, ValueError) as e:
            raise CodecError(f"Cannot decode message: {e}") from e
