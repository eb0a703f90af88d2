"""Shared pytest fixtures for PhotoStudio tests."""

import shutil
import tempfile
from collections.abc import Callable
from pathlib import Path
from typing import Generator
from unittest.mock import AsyncMock, Mock

import pytest
from PIL import Image

from photostudio.core.config import PhotoStudioConfig
from photostudio.ui.models import InteractionState

MiB = 1024 * 1024


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files.

    Yields:
        Path to temporary directory

    Cleanup:
        Directory is removed after test completes
    """
    temp_path = Path(tempfile.mkdtemp())
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def test_config() -> PhotoStudioConfig:
    """Create a test configuration that ignores the environment's .env file.

    Returns:
        PhotoStudioConfig instance for testing
    """
    return PhotoStudioConfig(api_key="test-key", _env_file=None)


@pytest.fixture
def make_image(temp_dir: Path) -> Callable[..., Path]:
    """Factory writing small image files, optionally padded to a given size.

    Padding is appended after the encoded image, which leaves the header
    readable while controlling the file size seen by upload validation.

    Returns:
        Function ``(name, image_format="PNG", size=None) -> Path``
    """

    def _make(name: str, image_format: str = "PNG", size: int | None = None) -> Path:
        path = temp_dir / name
        Image.new("RGB", (8, 8), color=(200, 30, 30)).save(path, format=image_format)
        if size is not None:
            current = path.stat().st_size
            with path.open("ab") as f:
                f.write(b"\0" * (size - current))
        return path

    return _make


@pytest.fixture
def png_image(make_image) -> Path:
    """A small valid PNG upload."""
    return make_image("product.png")


@pytest.fixture
def ui_state() -> InteractionState:
    """Create empty interaction state for testing.

    Returns:
        InteractionState instance
    """
    return InteractionState()


@pytest.fixture
def fake_client() -> Mock:
    """Remote generation client with async operations mocked out.

    Returns:
        Mock exposing ``edit_image`` and ``recognize_objects`` as AsyncMocks
    """
    client = Mock()
    client.edit_image = AsyncMock(return_value="RURJVEVE")
    client.recognize_objects = AsyncMock(return_value=["shoes", "sneakers", "red"])
    return client
