import pytest

from fingerpaint.sketch import SketchController


@pytest.fixture
def controller():
    return SketchController()


@pytest.fixture
def state(controller):
    return controller.state


@pytest.fixture
def layout(controller):
    return controller.layout
