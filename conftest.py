"""Pytest configuration and shared fixtures."""

import threading
import time

import cv2
import numpy as np
import pytest

from ocr_bridge.core.access import FileAccessGrant
from ocr_bridge.core.models import TextCandidate, TextObservation
from ocr_bridge.engines.base import RecognitionEngine


class FakeEngine(RecognitionEngine):
    """Engine returning canned observations keyed by image path."""

    name = "fake"

    def __init__(self, results=None, error=None, prepare_error=None, delays=None):
        super().__init__({})
        self.results = results or {}
        self.error = error
        self.prepare_error = prepare_error
        self.delays = delays or {}
        self.threads = []

    def prepare(self, image_path):
        if self.prepare_error is not None:
            raise self.prepare_error
        return image_path

    def recognize(self, image):
        self.threads.append(threading.get_ident())
        time.sleep(self.delays.get(image, 0.0))
        if self.error is not None:
            raise self.error
        return self.results.get(image, [])


class RecordingGrant(FileAccessGrant):
    """Grant that records begin/end calls in a shared log."""

    def __init__(self, path, log, grant=True):
        super().__init__(path)
        self.log = log
        self.grant = grant

    def begin_access(self):
        self.log.append(('begin', self.path))
        return self.grant

    def end_access(self):
        self.log.append(('end', self.path))


def observation(*candidates):
    """Build an observation from ``(string, confidence)`` pairs."""
    return TextObservation([TextCandidate(text, conf) for text, conf in candidates])


@pytest.fixture
def make_observation():
    return observation


@pytest.fixture
def fake_engine():
    """Factory for fake recognition engines."""
    return FakeEngine


@pytest.fixture
def grant_log():
    return []


@pytest.fixture
def recording_grants(grant_log):
    """Grant factory that records into ``grant_log``."""
    return lambda path: RecordingGrant(path, grant_log)


@pytest.fixture
def denied_grants(grant_log):
    """Grant factory whose grants are never acquired."""
    return lambda path: RecordingGrant(path, grant_log, grant=False)


@pytest.fixture
def image_file(tmp_path):
    """A small real PNG image on disk."""
    path = tmp_path / "scan.png"
    image = np.ones((120, 320, 3), dtype=np.uint8) * 255
    cv2.putText(image, "HELLO", (10, 80), cv2.FONT_HERSHEY_SIMPLEX, 2, (0, 0, 0), 3)
    cv2.imwrite(str(path), image)
    return str(path)


@pytest.fixture
def blank_image(tmp_path):
    """A blank white PNG image on disk."""
    path = tmp_path / "blank.png"
    cv2.imwrite(str(path), np.ones((100, 100, 3), dtype=np.uint8) * 255)
    return str(path)
