"""Shared pytest fixtures for the smart wand test suite.

Fixtures:
    blank_image: 100x80 all-white snapshot
    solid_line_image: 200x100 snapshot with one 3px horizontal line
    dashed_line_image: 200x100 snapshot with a dashed line (20px dashes, 8px gaps)
    crossing_image: 200x100 snapshot with two 3px lines crossing at (100, 50)
    bar_mask: 100x200 boolean mask with a 5px thick horizontal bar

Markers:
    slow: Mark test as slow-running (skip with -m "not slow")
    integration: Mark test as integration test
"""

import sys
from pathlib import Path

import numpy as np
import pytest

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from wand_lib.utils.rendering import (
    draw_dashed_hline,
    draw_hline,
    draw_vline,
    new_canvas,
    to_pixel_image,
)


# -----------------------------------------------------------------------------
# Pytest Markers
# -----------------------------------------------------------------------------

def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line(
        "markers", "slow: mark test as slow-running (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )


# -----------------------------------------------------------------------------
# Image Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def blank_image():
    """All-white 100x80 snapshot."""
    return to_pixel_image(new_canvas(100, 80))


@pytest.fixture
def solid_line_image():
    """Black 3px line over columns 20..179, rows 49..51, on white 200x100."""
    canvas = new_canvas(200, 100)
    draw_hline(canvas, 20, 179, 50, thickness=3)
    return to_pixel_image(canvas)


@pytest.fixture
def dashed_line_image():
    """Dashed 3px line from x=10 to x=189 at y=50: 20px dashes, 8px gaps.

    Dashes cover columns 10-29, 38-57, 66-85, 94-113, 122-141, 150-169
    and 178-189.
    """
    canvas = new_canvas(200, 100)
    draw_dashed_hline(canvas, 10, 189, 50, dash=20, gap=8, thickness=3)
    return to_pixel_image(canvas)


@pytest.fixture
def crossing_image():
    """Horizontal line x 10..189 and vertical line y 10..89 crossing at (100, 50)."""
    canvas = new_canvas(200, 100)
    draw_hline(canvas, 10, 189, 50, thickness=3)
    draw_vline(canvas, 100, 10, 89, thickness=3)
    return to_pixel_image(canvas)


# -----------------------------------------------------------------------------
# Mask Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def bar_mask():
    """5px thick bar: rows 48..52, columns 20..179 of a 100x200 mask.

    Its chamfer distance along row 50 is 3 away from the bar ends.
    """
    mask = np.zeros((100, 200), dtype=bool)
    mask[48:53, 20:180] = True
    return mask
