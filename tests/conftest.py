"""
Pytest configuration and shared fixtures.
"""

import io

import pytest

from spacecore.data_models import Body, Viewport, World
from spacecore.terminal import ANSITerminal


@pytest.fixture
def viewport():
    """Drawable region of an 80x24 terminal."""
    return Viewport.for_terminal(80, 24)


@pytest.fixture
def term():
    """Terminal writing into a StringIO with a fixed 80x24 size."""
    return ANSITerminal(stream=io.StringIO(), size=(80, 24))


@pytest.fixture
def three_body_world():
    """Three free bodies with unequal masses and velocities."""
    bodies = [
        Body("a", mass=5.0e24, position=(0.0, 0.0), velocity=(10.0, -5.0)),
        Body("b", mass=7.0e22, position=(3.8e8, 1.0e7), velocity=(-20.0, 1000.0)),
        Body("c", mass=1.0e23, position=(-2.0e8, 3.0e8), velocity=(800.0, 300.0)),
    ]
    return World.from_bodies(bodies)
