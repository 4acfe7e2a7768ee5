"""
Pytest configuration and shared fixtures for InstaFilter tests.

This module provides shared test fixtures and configuration
used across multiple test modules.
"""

import pytest
from PIL import Image

from IF_Libs.PipelineLib import FilterPipeline, UsageCounter
from IF_Libs.PrefStoreLib import PreferenceStore


@pytest.fixture
def tiny_image():
    """
    Provide the known 2x2 RGBA test image.

    Returns:
        PIL Image with red, green, blue and grey pixels
    """
    image = Image.new("RGBA", (2, 2))
    image.putdata([
        (200, 40, 40, 255),    # Red
        (40, 200, 40, 255),    # Green
        (40, 40, 200, 255),    # Blue
        (128, 128, 128, 255),  # Grey
    ])
    return image


@pytest.fixture
def gradient_image():
    """Provide a 48x32 RGB gradient with some structure for spatial filters."""
    image = Image.new("RGB", (48, 32))
    image.putdata([
        ((x * 5) % 256, (y * 8) % 256, ((x + y) * 3) % 256)
        for y in range(32)
        for x in range(48)
    ])
    return image


@pytest.fixture
def preference_store(tmp_path):
    """Provide a PreferenceStore backed by a temporary file."""
    return PreferenceStore(tmp_path / "preferences.json")


@pytest.fixture
def pipeline(preference_store):
    """Provide a FilterPipeline whose usage counter lives in a temp store."""
    return FilterPipeline(UsageCounter(preference_store))
