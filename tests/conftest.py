import os
import sys
from pathlib import Path

import pytest


# Ensure the package is importable without installation
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


class FakeClock:
    """Управляемые часы для TTLStore (секунды)."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


def pytest_configure(config):
    # Keep environment predictable for tests
    os.environ.pop("AUR_CHECKER_API_URL", None)
    os.environ.pop("AUR_CHECKER_OPTIONS", None)
