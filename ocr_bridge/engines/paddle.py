"""Recognition engine backed by PaddleOCR."""

import logging
import threading
from typing import Any, Dict, List, Optional

import numpy as np

from ..core.errors import EngineUnavailableError
from ..core.models import TextCandidate, TextObservation
from ..utils import load_image
from .base import RecognitionEngine

logger = logging.getLogger(__name__)


class PaddleOCREngine(RecognitionEngine):
    """PaddleOCR engine wrapper.

    The underlying pipeline is created on first use and is not thread-safe,
    so recognition calls are serialized on an engine-wide lock.
    """

    name = "paddle"

    def __init__(self, config: Optional[Dict] = None):
        super().__init__(config)
        paddle_config = self.config.get('paddle', {})
        self.device = paddle_config.get('device', 'cpu')
        self.min_score = paddle_config.get('min_score', 0.0)
        self.unwarp = paddle_config.get('use_doc_unwarping', False)
        self.ocr = None
        self._lock = threading.Lock()

    def load_model(self):
        if self.ocr is not None:
            return self.ocr
        try:
            from paddleocr import PaddleOCR
        except ImportError as e:
            raise EngineUnavailableError(f"paddleocr is not installed: {e}") from e

        logger.info(f"Loading PaddleOCR pipeline (lang={self.lang}, level={self.recognition_level})")
        # Orientation classifiers cost latency; only the accurate level enables them
        self.ocr = PaddleOCR(
            lang=self.lang,
            device=self.device,
            use_doc_orientation_classify=self.accurate,
            use_textline_orientation=self.accurate,
            use_doc_unwarping=self.unwarp,
            text_rec_score_thresh=self.min_score,
        )
        return self.ocr

    def prepare(self, image_path: str) -> np.ndarray:
        return load_image(image_path)

    def recognize(self, image: Any) -> List[TextObservation]:
        with self._lock:
            ocr = self.load_model()
            results = ocr.predict(image)
        return parse_paddle_results(results)


def parse_paddle_results(results: Any) -> List[TextObservation]:
    """Convert PaddleOCR pipeline output into observations.

    Each page result carries parallel ``rec_texts`` / ``rec_scores`` lists;
    every recognized line becomes one observation with a single candidate.

    Args:
        results: Return value of ``PaddleOCR.predict``

    Returns:
        Observations in the order PaddleOCR reported them
    """
    observations = []
    for page in results or []:
        if page is None:
            continue
        texts = page.get('rec_texts') or []
        scores = page.get('rec_scores') or []
        for idx, text in enumerate(texts):
            text = text.strip()
            if not text:
                continue
            score = float(scores[idx]) if idx < len(scores) else 0.0
            observations.append(TextObservation([TextCandidate(text, score)]))
    return observations
