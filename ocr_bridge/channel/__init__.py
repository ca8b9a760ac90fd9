"""Method channel transport."""

from .codec import JSONMethodCodec, MethodCall
from .channel import MethodChannel
from .messenger import BinaryMessenger
from .ocr_handler import OCR_CHANNEL, EXTRACT_TEXT, OCRChannelHandler, create_ocr_channel

__all__ = [
    "JSONMethodCodec", "MethodCall", "MethodChannel", "BinaryMessenger",
    "OCR_CHANNEL", "EXTRACT_TEXT", "OCRChannelHandler", "create_ocr_channel",
]
