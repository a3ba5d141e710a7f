"""
Pytest configuration for mdproof
"""

import logging
import sys
from pathlib import Path
from typing import Dict, Optional, Tuple

import pytest
from PIL import Image

from mdproof.config import LayoutConfig
from mdproof.engine.geometry import Margins, Size


class StubMetrics:
    """Deterministic metrics: fixed widths per text, fixed line height."""

    def __init__(
        self,
        widths: Optional[Dict[str, float]] = None,
        char_width: float = 10.0,
        line_height: float = 20.0,
        images: Optional[Dict[str, Tuple[float, float]]] = None,
    ):
        self.widths = widths or {}
        self.char_width = char_width
        self.line_height = line_height
        self.images = images or {}
        self.text_calls = []

    def measure_text(self, style, text):
        self.text_calls.append(text)
        if text in self.widths:
            return self.widths[text], self.line_height
        return len(text) * self.char_width, self.line_height

    def measure_image(self, uri):
        return self.images.get(uri)


@pytest.fixture(autouse=True)
def configure_logging():
    """Configure logging for tests to avoid file handler issues."""
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(logging.Formatter('%(name)s - %(levelname)s - %(message)s'))

    root_logger.addHandler(console_handler)
    root_logger.setLevel(logging.WARNING)

    yield

    root_logger.handlers.clear()


@pytest.fixture
def temp_dir(tmp_path) -> Path:
    return tmp_path


@pytest.fixture
def stub_metrics():
    return StubMetrics(widths={"Hello": 40, "World": 40, "Friends": 50, " ": 10})


@pytest.fixture
def small_config():
    """800pt tall page with 50pt margins: 700pt of usable height."""
    return LayoutConfig(
        page_size=Size(400.0, 800.0),
        margins=Margins.uniform(50.0),
        line_spacing=1.0,
        list_indentation=20.0,
        quote_indentation=30.0,
        code_indentation=15.0,
        section_spacing=10.0,
    )


@pytest.fixture
def sample_image(tmp_path) -> Path:
    """A 600x300 px PNG: 144x72 pt at 300 dpi."""
    path = tmp_path / "picture.png"
    Image.new("RGB", (600, 300), color=(200, 30, 30)).save(path)
    return path


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
    logging.raiseExceptions = False


@pytest.fixture
def metrics_factory():
    """Build StubMetrics with custom widths, line height or images."""
    return StubMetrics
