"""Selection of the service variant and recognition engine for this host."""

import importlib.util
import logging
import sys
from typing import Dict, Optional

from .errors import EngineUnavailableError
from .service import BackgroundOCRService, InlineOCRService, OCRExecutionService

logger = logging.getLogger(__name__)

MOBILE = "mobile"
DESKTOP = "desktop"
MOBILE_PLATFORMS = {"ios", "android"}


def detect_platform(setting: str = "auto", system: Optional[str] = None) -> str:
    """Resolve the host platform family.

    Args:
        setting: ``auto``, ``mobile`` or ``desktop``
        system: Value to use instead of ``sys.platform``

    Returns:
        ``mobile`` or ``desktop``
    """
    if setting in (MOBILE, DESKTOP):
        return setting
    if setting != "auto":
        raise ValueError(f"Unknown platform setting: {setting}")
    system = system or sys.platform
    return MOBILE if system in MOBILE_PLATFORMS else DESKTOP


def determine_backend(setting: str = "auto") -> str:
    """Choose between paddle and tesseract.

    PaddleOCR is preferred when it is installed.
    """
    if setting in ("paddle", "tesseract"):
        return setting
    if setting != "auto":
        raise ValueError(f"Unknown engine backend: {setting}")
    if importlib.util.find_spec("paddleocr") is not None:
        return "paddle"
    return "tesseract"


def create_engine(config: Dict):
    """Build the recognition engine described by ``config['engine']``.

    Raises:
        EngineUnavailableError: If the backend library is not installed
    """
    engine_config = config.get('engine', {})
    backend = determine_backend(engine_config.get('backend', 'auto'))

    if backend == "paddle":
        from ..engines.paddle import PaddleOCREngine
        engine = PaddleOCREngine(engine_config)
    else:
        try:
            from ..engines.tesseract import TesseractEngine
        except ImportError as e:
            raise EngineUnavailableError(f"pytesseract is not installed: {e}") from e
        engine = TesseractEngine(engine_config)

    logger.info(f"Using {engine.name} recognition engine ({engine.recognition_level})")
    return engine


def create_service(config: Dict, engine=None) -> OCRExecutionService:
    """Build the execution service variant for this host.

    Args:
        config: Full configuration dictionary
        engine: Engine to use instead of the configured one

    Returns:
        InlineOCRService on mobile hosts, BackgroundOCRService otherwise
    """
    platform = detect_platform(config.get('platform', 'auto'))
    engine = engine or create_engine(config)

    if platform == MOBILE:
        service = InlineOCRService(engine)
    else:
        max_workers = config.get('service', {}).get('max_workers', 4)
        service = BackgroundOCRService(engine, max_workers=max_workers)

    logger.info(f"OCR service running in {platform} mode")
    return service
