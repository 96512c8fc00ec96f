"""
Pytest configuration and shared fixtures for Snapshot tests.

This module provides shared test fixtures and configuration
used across multiple test modules.
"""

from io import BytesIO

import pytest
from PIL import Image

from Snap_Libs.RecordStoreLib.file_store import FileMediaStore
from Snap_Libs.RecordStoreLib.media_store import InMemoryMediaStore, reset_default_store


class RecordingRenderer:
    """
    Fake renderer that records its calls.

    The output encodes the height and transform in front of the source so
    tests can tell renders apart without decoding images.
    """

    def __init__(self):
        self.calls = []
        self.error = None

    @staticmethod
    def expected(source, transform, height=None):
        params = ",".join(f"{key}={value}" for key, value in sorted(transform.to_dict().items()))
        return f"render[{height}|{params}]".encode() + source

    async def __call__(self, source, transform, height=None):
        self.calls.append((source, transform, height))
        if self.error is not None:
            raise self.error
        return self.expected(source, transform, height)


@pytest.fixture(autouse=True)
def clean_default_store():
    """Give every test a fresh process-wide default store."""
    reset_default_store()
    yield
    reset_default_store()


@pytest.fixture
def memory_store():
    return InMemoryMediaStore()


@pytest.fixture
def file_store(tmp_path):
    return FileMediaStore(tmp_path / "library")


@pytest.fixture
def renderer():
    return RecordingRenderer()


@pytest.fixture
def sample_image():
    """
    Provide a 400x300 RGB image with four colored quadrants.

    Returns:
        PIL Image
    """
    image = Image.new("RGB", (400, 300), (200, 40, 40))
    image.paste((40, 200, 40), (200, 0, 400, 150))
    image.paste((40, 40, 200), (0, 150, 200, 300))
    image.paste((230, 230, 230), (200, 150, 400, 300))
    return image


@pytest.fixture
def sample_jpeg(sample_image):
    """Provide sample_image encoded as JPEG bytes."""
    buffer = BytesIO()
    sample_image.save(buffer, format="JPEG")
    return buffer.getvalue()


@pytest.fixture
def sample_png(sample_image):
    """Provide sample_image encoded as PNG bytes."""
    buffer = BytesIO()
    sample_image.save(buffer, format="PNG")
    return buffer.getvalue()
