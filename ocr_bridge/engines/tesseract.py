"""Recognition engine backed by Tesseract via pytesseract."""

import logging
from typing import Any, Dict, List, Optional, Tuple

import cv2
import numpy as np
import pytesseract

from ..core.models import TextCandidate, TextObservation
from ..utils import load_image
from .base import RecognitionEngine

logger = logging.getLogger(__name__)

# ISO 639-1 codes used in config -> Tesseract traineddata names
LANG_CODES = {
    'en': 'eng',
    'ar': 'ara',
    'de': 'deu',
    'es': 'spa',
    'fr': 'fra',
    'hi': 'hin',
    'ur': 'urd',
}


class TesseractEngine(RecognitionEngine):
    """Tesseract OCR engine; each text line becomes one observation."""

    name = "tesseract"

    def __init__(self, config: Optional[Dict] = None):
        super().__init__(config)
        tesseract_config = self.config.get('tesseract', {})
        if tesseract_config.get('cmd'):
            pytesseract.pytesseract.tesseract_cmd = tesseract_config['cmd']
        self.psm = tesseract_config.get('psm', 3)
        self.tesseract_lang = tesseract_config.get('lang') or LANG_CODES.get(self.lang, self.lang)

    def build_config(self) -> str:
        """Build the Tesseract command-line configuration string.

        Returns:
            Config string passed to pytesseract
        """
        options = ["--oem 1", f"--psm {self.psm}"]
        if not self.accurate:
            # Skip the second pass over inverted text
            options.append("-c tessedit_do_invert=0")
        if not self.uses_language_correction:
            options.append("-c load_system_dawg=0")
            options.append("-c load_freq_dawg=0")
        return " ".join(options)

    def prepare(self, image_path: str) -> np.ndarray:
        image = load_image(image_path)
        return cv2.cvtColor(image, cv2.COLOR_BGR2RGB)

    def recognize(self, image: Any) -> List[TextObservation]:
        data = pytesseract.image_to_data(
            image,
            lang=self.tesseract_lang,
            config=self.build_config(),
            output_type=pytesseract.Output.DICT
        )
        return group_lines(data)


def group_lines(data: Dict[str, List]) -> List[TextObservation]:
    """Group Tesseract word rows into line observations.

    Args:
        data: ``image_to_data`` output in dict form

    Returns:
        One observation per text line, in Tesseract's reading order. The
        candidate confidence is the mean word confidence scaled to [0, 1].
    """
    lines: Dict[Tuple[int, int, int], List[Tuple[str, float]]] = {}
    order = []

    for idx, text in enumerate(data.get('text', [])):
        text = (text or '').strip()
        confidence = float(data['conf'][idx])
        if not text or confidence < 0:
            continue
        key = (data['block_num'][idx], data['par_num'][idx], data['line_num'][idx])
        if key not in lines:
            lines[key] = []
            order.append(key)
        lines[key].append((text, confidence))

    observations = []
    for key in order:
        words = lines[key]
        line_text = ' '.join(word for word, _ in words)
        mean_conf = sum(conf for _, conf in words) / len(words)
        observations.append(TextObservation([TextCandidate(line_text, mean_conf / 100.0)]))
    return observations
