import sys
from pathlib import Path

import pytest

# Ensure 'src' is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))

from essence_pouch.pouches import PouchKind  # noqa: E402


@pytest.fixture()
def twelve_kind() -> PouchKind:
    """Decaying kind with capacity 12, nothing while degraded and 5 usage before decay."""
    return PouchKind("Test Pouch", 12, 0, 5)
