"""Recognition engines."""

from .base import RecognitionEngine, ACCURATE, FAST

__all__ = ['RecognitionEngine', 'ACCURATE', 'FAST']
