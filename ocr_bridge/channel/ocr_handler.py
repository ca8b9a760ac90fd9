"""Binds the OCR execution service to its method channel."""

from typing import Optional

from ..core.errors import MethodNotImplementedError
from ..core.models import OCRFailure, OCRRequest
from .channel import MethodChannel
from .codec import JSONMethodCodec, MethodCall

OCR_CHANNEL = "com.sehatlocker/vision_ocr"
EXTRACT_TEXT = "extractText"


class OCRChannelHandler:
    """Method call handler for the OCR channel."""

    def __init__(self, service):
        self.service = service

    async def __call__(self, call: MethodCall) -> str:
        if call.method != EXTRACT_TEXT:
            raise MethodNotImplementedError(call.method)

        outcome = await self.service.extract_text(call.arguments)
        if isinstance(outcome, OCRFailure):
            raise outcome.to_error()
        return outcome.text


def create_ocr_channel(service, name: str = OCR_CHANNEL,
                       codec: Optional[JSONMethodCodec] = None) -> MethodChannel:
    """Create a channel whose ``extractText`` method is served by ``service``."""
    channel = MethodChannel(name, codec)
    channel.set_method_call_handler(OCRChannelHandler(service))
    return channel


async def extract_text(channel: MethodChannel, image_path: str) -> str:
    """Application-side helper: call ``extractText`` on ``channel``.

    Raises:
        PlatformChannelError: With code ``bad_args``, ``not_found`` or
            ``vision_error``
    """
    return await channel.invoke_method(EXTRACT_TEXT, OCRRequest(image_path).to_arguments())
