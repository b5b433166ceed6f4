import random
import sys
from pathlib import Path

import pytest

# Ensure the package is importable when tests are run without installing it
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from wordscramble.dictionary import DictionaryService


class FakeSio:
    """Records emits instead of sending them."""

    def __init__(self):
        self.emitted = []

    async def emit(self, event, data=None, room=None, to=None):
        self.emitted.append((event, data, room or to))


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def oracle():
    return DictionaryService({
        "listen", "silent", "silt", "list", "lets", "tin", "tins", "lint", "tile", "net",
        "nest", "set", "sit", "inlet", "enlist", "tinsel", "cat", "act", "car", "cart", "art",
        "silkworm", "silk", "milk", "work", "worm", "owl", "sow",
    })


@pytest.fixture
def fake_sio():
    return FakeSio()
