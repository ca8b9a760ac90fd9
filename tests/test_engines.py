"""Tests for recognition engines and engine selection."""

import asyncio
import importlib.util
import shutil

import numpy as np
import pytest

from ocr_bridge.core import factory
from ocr_bridge.core.errors import EngineUnavailableError
from ocr_bridge.core.models import OCRResponse
from ocr_bridge.core.service import BackgroundOCRService, InlineOCRService
from ocr_bridge.engines import tesseract as tesseract_module
from ocr_bridge.engines.paddle import PaddleOCREngine, parse_paddle_results
from ocr_bridge.engines.tesseract import TesseractEngine, group_lines


class FakePaddle:
    """Stands in for a loaded PaddleOCR pipeline."""

    def __init__(self, pages):
        self.pages = pages
        self.inputs = []

    def predict(self, image):
        self.inputs.append(image)
        return self.pages


@pytest.fixture
def tesseract_data():
    """image_to_data output for two lines and some noise."""
    return {
        'text': ['', 'Patient', 'Name', '', 'Blood', 'Type', 'O+', ' '],
        'conf': [-1, 96.0, 90.0, -1, 80, 70, 60, -1],
        'block_num': [1, 1, 1, 1, 1, 1, 1, 1],
        'par_num': [1, 1, 1, 1, 1, 1, 1, 1],
        'line_num': [1, 1, 1, 2, 2, 2, 2, 2],
    }


def test_invalid_recognition_level():
    with pytest.raises(ValueError):
        TesseractEngine({'recognition_level': 'balanced'})


class TestPaddle:
    """Test PaddleOCR result parsing and engine wiring."""

    def test_parse_results(self):
        pages = [{'rec_texts': ['Allergy card', '  ', 'Peanuts'], 'rec_scores': [0.98, 0.5, 0.87]}]

        observations = parse_paddle_results(pages)

        assert [o.best.string for o in observations] == ['Allergy card', 'Peanuts']
        assert observations[1].best.confidence == pytest.approx(0.87)

    def test_parse_empty_results(self):
        assert parse_paddle_results([]) == []
        assert parse_paddle_results(None) == []
        assert parse_paddle_results([None, {'rec_texts': [], 'rec_scores': []}]) == []

    def test_submit_uses_loaded_pipeline(self, image_file):
        engine = PaddleOCREngine({'lang': 'en'})
        engine.ocr = FakePaddle([{'rec_texts': ['HELLO'], 'rec_scores': [0.99]}])
        outcomes = []

        engine.submit(image_file, lambda obs, err: outcomes.append((obs, err)))

        observations, error = outcomes[0]
        assert error is None
        assert observations[0].best.string == 'HELLO'
        assert isinstance(engine.ocr.inputs[0], np.ndarray)

    def test_submit_raises_for_undecodable_image(self, tmp_path):
        path = tmp_path / "broken.png"
        path.write_bytes(b"not an image")
        engine = PaddleOCREngine()
        engine.ocr = FakePaddle([])

        with pytest.raises(ValueError):
            engine.submit(str(path), lambda obs, err: None)

    def test_recognition_error_goes_to_completion(self, image_file):
        class BrokenPaddle:
            def predict(self, image):
                raise RuntimeError("predictor crashed")

        engine = PaddleOCREngine()
        engine.ocr = BrokenPaddle()
        outcomes = []

        engine.submit(image_file, lambda obs, err: outcomes.append((obs, err)))

        assert outcomes[0][0] is None
        assert str(outcomes[0][1]) == "predictor crashed"

    def test_missing_paddleocr(self, monkeypatch):
        import builtins
        real_import = builtins.__import__

        def fake_import(name, *args, **kwargs):
            if name == "paddleocr":
                raise ImportError("No module named 'paddleocr'")
            return real_import(name, *args, **kwargs)

        monkeypatch.setattr(builtins, "__import__", fake_import)

        with pytest.raises(EngineUnavailableError):
            PaddleOCREngine().load_model()


class TestTesseract:
    """Test Tesseract line grouping and configuration."""

    def test_group_lines(self, tesseract_data):
        observations = group_lines(tesseract_data)

        assert [o.best.string for o in observations] == ['Patient Name', 'Blood Type O+']
        assert observations[0].best.confidence == pytest.approx(0.93)
        assert observations[1].best.confidence == pytest.approx(0.70)

    def test_group_lines_empty(self):
        assert group_lines({'text': [], 'conf': [], 'block_num': [], 'par_num': [], 'line_num': []}) == []

    def test_accurate_config(self):
        engine = TesseractEngine()

        assert engine.build_config() == "--oem 1 --psm 3"
        assert engine.tesseract_lang == "eng"

    def test_fast_config_without_correction(self):
        engine = TesseractEngine({
            'recognition_level': 'fast',
            'uses_language_correction': False,
            'lang': 'ur',
            'tesseract': {'psm': 6}
        })

        config = engine.build_config()

        assert config.startswith("--oem 1 --psm 6")
        assert "tessedit_do_invert=0" in config
        assert "load_system_dawg=0" in config
        assert "load_freq_dawg=0" in config
        assert engine.tesseract_lang == "urd"

    def test_recognize(self, monkeypatch, image_file, tesseract_data):
        calls = []

        def fake_image_to_data(image, lang, config, output_type):
            calls.append((image.shape, lang, config))
            return tesseract_data

        monkeypatch.setattr(tesseract_module.pytesseract, "image_to_data", fake_image_to_data)
        engine = TesseractEngine()
        outcomes = []

        engine.submit(image_file, lambda obs, err: outcomes.append((obs, err)))

        observations, error = outcomes[0]
        assert error is None
        assert len(observations) == 2
        assert calls[0] == ((120, 320, 3), 'eng', '--oem 1 --psm 3')


class TestFactory:
    """Test platform and backend selection."""

    @pytest.mark.parametrize("system,expected", [
        ("ios", "mobile"),
        ("android", "mobile"),
        ("darwin", "desktop"),
        ("win32", "desktop"),
        ("linux", "desktop"),
    ])
    def test_detect_platform(self, system, expected):
        assert factory.detect_platform("auto", system) == expected

    def test_explicit_platform(self):
        assert factory.detect_platform("mobile", "darwin") == "mobile"

    def test_invalid_platform(self):
        with pytest.raises(ValueError):
            factory.detect_platform("watch")

    def test_backend_auto_prefers_paddle(self, monkeypatch):
        monkeypatch.setattr(importlib.util, "find_spec", lambda name: object())
        assert factory.determine_backend("auto") == "paddle"

    def test_backend_auto_falls_back_to_tesseract(self, monkeypatch):
        monkeypatch.setattr(importlib.util, "find_spec", lambda name: None)
        assert factory.determine_backend("auto") == "tesseract"

    def test_invalid_backend(self):
        with pytest.raises(ValueError):
            factory.determine_backend("vision")

    def test_create_engine_tesseract(self):
        engine = factory.create_engine({'engine': {'backend': 'tesseract', 'recognition_level': 'fast'}})

        assert isinstance(engine, TesseractEngine)
        assert engine.recognition_level == 'fast'

    def test_create_engine_paddle_is_lazy(self):
        engine = factory.create_engine({'engine': {'backend': 'paddle'}})

        assert isinstance(engine, PaddleOCREngine)
        assert engine.ocr is None

    def test_create_service_variants(self, fake_engine):
        mobile = factory.create_service({'platform': 'mobile'}, engine=fake_engine())
        desktop = factory.create_service(
            {'platform': 'desktop', 'service': {'max_workers': 2}}, engine=fake_engine()
        )
        try:
            assert isinstance(mobile, InlineOCRService)
            assert isinstance(desktop, BackgroundOCRService)
            assert desktop.executor._max_workers == 2
        finally:
            desktop.close()


@pytest.mark.skipif(shutil.which("tesseract") is None, reason="tesseract binary not installed")
def test_tesseract_blank_image(blank_image):
    """Test a real Tesseract run on a blank image gives an empty success."""
    service = InlineOCRService(TesseractEngine())

    outcome = asyncio.run(service.extract_text({'imagePath': blank_image}))

    assert outcome == OCRResponse(text="")
