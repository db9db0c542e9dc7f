import pytest

from gearspeed.generator import generate_all_combinations


@pytest.fixture
def combinations():
    """Full base collection for the default motors and gears"""
    return generate_all_combinations()
