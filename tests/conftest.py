import os

# Widgets are created headless in the lesson/panel tests
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from vectorlab.core.camera import CameraState, Viewport
from vectorlab.core.fields import GRADIENT_FIELDS, INTEGRAL_FIELDS


@pytest.fixture(scope="session")
def qapp():
    from vectorlab.app.application import create_app

    return create_app([])


@pytest.fixture
def viewport():
    return Viewport(800.0, 600.0)


@pytest.fixture
def flat_camera():
    return CameraState.flat(scale=40.0)


@pytest.fixture
def orbit_camera():
    return CameraState(pitch=-0.3, yaw=0.5, scale=40.0)


@pytest.fixture
def bowl():
    return GRADIENT_FIELDS[0]


@pytest.fixture
def paraboloid():
    return INTEGRAL_FIELDS[0]
