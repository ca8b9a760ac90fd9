"""Data models for OCR requests, responses and recognition observations."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from .errors import ErrorCode, PlatformChannelError

IMAGE_PATH_KEY = "imagePath"
MISSING_IMAGE_PATH = "Missing imagePath"
IMAGE_NOT_FOUND = "Image not found"


@dataclass
class TextCandidate:
    """One candidate transcription for a recognized region."""
    string: str
    confidence: float = 1.0


@dataclass
class TextObservation:
    """A region of recognized text with its ranked candidates."""
    candidates: List[TextCandidate] = field(default_factory=list)

    def top_candidates(self, count: int) -> List[TextCandidate]:
        """Get the highest-confidence candidates.

        Args:
            count: Maximum number of candidates to return

        Returns:
            Candidates ordered by descending confidence; ties keep the
            order reported by the engine
        """
        if count <= 0:
            return []
        ranked = sorted(self.candidates, key=lambda c: c.confidence, reverse=True)
        return ranked[:count]

    @property
    def best(self) -> Optional[TextCandidate]:
        top = self.top_candidates(1)
        return top[0] if top else None


@dataclass
class OCRRequest:
    """A validated ``extractText`` request."""
    image_path: str

    @classmethod
    def from_arguments(cls, arguments: Any) -> "OCRRequest":
        """Build a request from raw channel arguments.

        Args:
            arguments: Decoded method call arguments

        Returns:
            OCRRequest instance

        Raises:
            PlatformChannelError: ``bad_args`` if ``imagePath`` is missing
                or not a string
        """
        if not isinstance(arguments, dict):
            raise PlatformChannelError(ErrorCode.BAD_ARGS, MISSING_IMAGE_PATH)
        image_path = arguments.get(IMAGE_PATH_KEY)
        if not isinstance(image_path, str):
            raise PlatformChannelError(ErrorCode.BAD_ARGS, MISSING_IMAGE_PATH)
        return cls(image_path=image_path)

    def to_arguments(self) -> Dict[str, str]:
        return {IMAGE_PATH_KEY: self.image_path}


@dataclass
class OCRResponse:
    """Successful recognition result."""
    text: str

    @property
    def lines(self) -> List[str]:
        return self.text.split("\n") if self.text else []


@dataclass
class OCRFailure:
    """Typed recognition failure."""
    code: ErrorCode
    message: str
    details: Optional[Any] = None

    @classmethod
    def from_error(cls, error: PlatformChannelError) -> "OCRFailure":
        return cls(code=ErrorCode(error.code), message=error.message, details=error.details)

    def to_error(self) -> PlatformChannelError:
        return PlatformChannelError(self.code, self.message, self.details)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            'code': self.code.value,
            'message': self.message,
            'details': self.details
        }


OCROutcome = Union[OCRResponse, OCRFailure]


def aggregate_observations(observations: List[TextObservation]) -> str:
    """Join the best candidate of every observation, one per line.

    Args:
        observations: Observations in the order reported by the engine

    Returns:
        Newline-joined text; empty string when nothing was recognized
    """
    lines = []
    for observation in observations:
        best = observation.best
        if best is not None:
            lines.append(best.string)
    return "\n".join(lines)
