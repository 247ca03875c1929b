"""
Shared fixtures for facescope tests.
"""
import numpy as np
import pytest

from factories import make_detection


@pytest.fixture
def detection():
    return make_detection()


@pytest.fixture
def frame():
    return np.zeros((120, 160, 3), dtype=np.uint8)
