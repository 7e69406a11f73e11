"""
Pytest configuration for TemplateQuill
"""

import pytest
import logging
import sys
from pathlib import Path

from PIL import Image as PILImage

from tests.docx_factory import build_docx


@pytest.fixture(autouse=True)
def configure_logging():
    """Configure logging for tests to avoid file handler issues."""
    # Clear all existing handlers
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    # Set up console-only logging for tests
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.WARNING)  # Only show warnings and errors during tests

    formatter = logging.Formatter(
        '%(name)s - %(levelname)s - %(message)s'
    )
    console_handler.setFormatter(formatter)

    root_logger.addHandler(console_handler)
    root_logger.setLevel(logging.WARNING)

    yield

    # Cleanup after test
    root_logger.handlers.clear()


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    import tempfile
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def working_dir(temp_dir, monkeypatch):
    """Directory for working copies, exported through the environment."""
    path = temp_dir / "work"
    path.mkdir()
    monkeypatch.setenv("TEMPLATEQUILL_TEMP_DIR", str(path))
    return path


@pytest.fixture
def make_template(temp_dir, working_dir):
    """Factory writing a DOCX template into temp_dir."""
    def _make(body, headers=(), footers=(), extra=None, name="template.docx"):
        return build_docx(temp_dir / name, body, headers=headers, footers=footers, extra=extra)
    return _make


@pytest.fixture
def make_image(temp_dir):
    """Factory writing a PNG image of the given pixel size."""
    def _make(width=20, height=10, name="picture.png"):
        path = temp_dir / name
        PILImage.new("RGB", (width, height), (200, 30, 30)).save(path, format="PNG")
        return path
    return _make


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
    # Ignore logging errors during tests
    logging.raiseExceptions = False
