"""OCR Bridge - extract text from images through a method channel."""

__version__ = "1.0.0"

from .core import (
    ErrorCode,
    OCRFailure,
    OCRResponse,
    PlatformChannelError,
    MethodNotImplementedError,
    create_service,
)
from .channel import OCR_CHANNEL, EXTRACT_TEXT, create_ocr_channel
from .utils import load_config, setup_logging

__all__ = [
    "ErrorCode", "OCRFailure", "OCRResponse", "PlatformChannelError",
    "MethodNotImplementedError", "create_service", "OCR_CHANNEL", "EXTRACT_TEXT",
    "create_ocr_channel", "load_config", "setup_logging",
]
