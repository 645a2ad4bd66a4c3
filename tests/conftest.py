import sys
from pathlib import Path

import pytest

# Add repo root to path so the CLI module imports without installation
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from halley import RenderRequest, Viewport


@pytest.fixture
def small_request():
    return RenderRequest(
        function_key="z³ - 1",
        viewport=Viewport(-3.0, 3.0, -3.0, 3.0),
        width=40,
        height=40,
        max_iterations=30,
        color_scheme="rainbow",
    )
