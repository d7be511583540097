"""Fixtures for persona image tests."""

import pytest

from tests.modules.personas.images import make_image_bytes


@pytest.fixture
def png_bytes() -> bytes:
    return make_image_bytes()


@pytest.fixture
def small_jpeg_bytes() -> bytes:
    return make_image_bytes(size=(640, 480), fmt="JPEG")
