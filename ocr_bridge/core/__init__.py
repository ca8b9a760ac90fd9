"""Core OCR execution module."""

from .errors import (
    ErrorCode,
    OCRBridgeError,
    PlatformChannelError,
    MethodNotImplementedError,
    EngineUnavailableError,
)
from .models import OCRRequest, OCRResponse, OCRFailure, TextCandidate, TextObservation
from .service import OCRExecutionService, InlineOCRService, BackgroundOCRService
from .factory import create_engine, create_service

__all__ = [
    "ErrorCode", "OCRBridgeError", "PlatformChannelError", "MethodNotImplementedError",
    "EngineUnavailableError", "OCRRequest", "OCRResponse", "OCRFailure", "TextCandidate",
    "TextObservation", "OCRExecutionService", "InlineOCRService", "BackgroundOCRService",
    "create_engine", "create_service",
]
