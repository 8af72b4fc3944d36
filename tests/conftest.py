import pytest

from jsinline.config import console_setup
from jsinline.config import verbose


@pytest.fixture(autouse=True)
def setup_tests():
    console_setup()
    verbose.value = 0
