"""Recognition engine interface."""

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional

from ..core.models import TextObservation

logger = logging.getLogger(__name__)

Completion = Callable[[Optional[List[TextObservation]], Optional[BaseException]], None]

ACCURATE = "accurate"
FAST = "fast"
RECOGNITION_LEVELS = (ACCURATE, FAST)


class RecognitionEngine(ABC):
    """Abstract text recognition backend.

    Engines load an image in :meth:`prepare` and recognize it in
    :meth:`recognize`. :meth:`submit` ties the two together the way native
    vision frameworks do: a failure to load the image is raised to the
    caller, a failure during recognition is reported to the completion.
    """

    name = "base"

    def __init__(self, config: Optional[Dict] = None):
        """Initialize engine.

        Args:
            config: Engine configuration dictionary
        """
        self.config = config or {}
        self.recognition_level = self.config.get('recognition_level', ACCURATE)
        if self.recognition_level not in RECOGNITION_LEVELS:
            raise ValueError(f"Invalid recognition level: {self.recognition_level}")
        self.uses_language_correction = self.config.get('uses_language_correction', True)
        self.lang = self.config.get('lang', 'en')

    @property
    def accurate(self) -> bool:
        return self.recognition_level == ACCURATE

    @abstractmethod
    def prepare(self, image_path: str) -> Any:
        """Load the image into the form :meth:`recognize` expects.

        Args:
            image_path: Path to an existing image file

        Returns:
            Engine-specific image object

        Raises:
            ValueError: If the image cannot be decoded
        """
        pass

    @abstractmethod
    def recognize(self, image: Any) -> List[TextObservation]:
        """Recognize text regions in a prepared image.

        Args:
            image: Output of :meth:`prepare`

        Returns:
            Observations in reading order
        """
        pass

    def submit(self, image_path: str, completion: Completion) -> None:
        """Recognize ``image_path`` and report the outcome to ``completion``.

        Args:
            image_path: Path to an existing image file
            completion: Called exactly once with ``(observations, None)``
                or ``(None, error)``

        Raises:
            Exception: Whatever :meth:`prepare` raises; completion is not
                called in that case
        """
        image = self.prepare(image_path)
        try:
            observations = self.recognize(image)
        except Exception as e:
            logger.warning(f"{self.name} recognition failed for {image_path}: {e}")
            completion(None, e)
            return
        completion(observations, None)

    def describe(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'recognition_level': self.recognition_level,
            'uses_language_correction': self.uses_language_correction,
            'lang': self.lang
        }
