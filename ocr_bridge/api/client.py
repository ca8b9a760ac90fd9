"""HTTP client for calling a remote channel host."""

import logging
from typing import Any, Optional

import requests

from ..channel.ocr_handler import EXTRACT_TEXT, OCR_CHANNEL
from ..core.errors import (
    ChannelTransportError,
    MethodNotImplementedError,
    PlatformChannelError,
    UnknownChannelError,
)
from ..core.models import OCRRequest
from .models import MethodReply

logger = logging.getLogger(__name__)


class ChannelClient:
    """Calls methods on one channel of an OCR bridge host."""

    def __init__(self, base_url: str, channel: str = OCR_CHANNEL, timeout: float = 60.0,
                 session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip('/')
        self.channel = channel
        self.timeout = timeout
        self.session = session or requests.Session()

    def invoke_method(self, method: str, arguments: Any = None) -> Any:
        """Invoke ``method`` and return its result.

        Raises:
            PlatformChannelError: If the host replied with an error
            MethodNotImplementedError: If the host does not implement the method
            UnknownChannelError: If the host has no such channel
            ChannelTransportError: On network failures or unexpected replies
        """
        url = f"{self.base_url}/channels/{self.channel}"
        try:
            response = self.session.post(
                url,
                json={'method': method, 'args': arguments},
                timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.error(f"Network error calling {method} on {url}: {e}")
            raise ChannelTransportError(f"Failed to reach {url}: {e}") from e

        if response.status_code == 501:
            raise MethodNotImplementedError(method, self.channel)
        if response.status_code == 404:
            raise UnknownChannelError(self.channel)
        if response.status_code != 200:
            raise ChannelTransportError(
                f"Unexpected HTTP {response.status_code} from {url}",
                status_code=response.status_code
            )

        try:
            reply = MethodReply.model_validate(response.json())
        except ValueError as e:
            raise ChannelTransportError(f"Invalid reply from {url}: {e}",
                                        status_code=response.status_code) from e

        if reply.status == "success":
            return reply.result
        if reply.status == "error" and reply.error is not None:
            raise PlatformChannelError(reply.error.code, reply.error.message or "", reply.error.details)
        raise ChannelTransportError(f"Unknown reply status: {reply.status}")

    def extract_text(self, image_path: str) -> str:
        """Extract text from an image on the host's filesystem."""
        return self.invoke_method(EXTRACT_TEXT, OCRRequest(image_path).to_arguments())

    def close(self) -> None:
        self.session.close()
