# tests/conftest.py
import pytest
from PySide6.QtCore import QCoreApplication

from windowlayout.model.geometry_primitives import Axis
from windowlayout.model.layout import LayoutModel, Panel
from windowlayout.model.lines import Line, PartialSpan


@pytest.fixture(scope="session")
def qapp():
    """One Qt core application for every test that creates QObjects/QTimers."""
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


@pytest.fixture
def square_panel() -> Panel:
    return Panel(width=1000.0, height=1000.0)


@pytest.fixture
def crossing_model() -> LayoutModel:
    """Full horizontal line at 0.5 crossed by a partial vertical line at 0.3 spanning [0.4, 0.6]."""
    return LayoutModel(
        horizontal=(Line(Axis.HORIZONTAL, 0.5, id="h-mid"),),
        vertical=(Line(Axis.VERTICAL, 0.3, PartialSpan(0.4, 0.6), id="v-part"),),
    )
