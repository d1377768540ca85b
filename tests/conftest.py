"""Test configuration — project root on sys.path, shared fixtures."""
import copy
import sys
from pathlib import Path

import pytest

# Add project root to path so `from src.xxx import` works
sys.path.insert(0, str(Path(__file__).parent.parent))


@pytest.fixture
def templates():
    """Private copy of the starter templates, safe to compare against after a patch."""
    from src.config import DEFAULT_TEMPLATES
    return copy.deepcopy(DEFAULT_TEMPLATES)
