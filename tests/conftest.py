"""Shared fixtures for boxgen tests."""
import pytest

from boxgen.services.engine import CsgEngine
from boxgen.services.parameters import ParameterSet


class RecordingEngine(CsgEngine):
    """Engine stand-in that records calls and returns descriptive tuples."""

    def __init__(self):
        self.calls = []

    def box(self, size, center):
        self.calls.append(("box", tuple(size), tuple(center)))
        return ("box", tuple(size), tuple(center))

    def subtract(self, solid, tool):
        self.calls.append(("subtract",))
        return ("subtract", solid, tool)

    def rounded_offset(self, solid, radius, corners="round", segments=16):
        self.calls.append(("rounded_offset", radius, corners, segments))
        return ("rounded_offset", solid, radius)


@pytest.fixture
def engine():
    return RecordingEngine()


@pytest.fixture
def scenario_a():
    """25.4 mm cube on a 100 mm printer, 1 mm wall, 0.2 mm layers."""
    return ParameterSet(
        nozzle_size=0.4,
        wall_thickness=1.0,
        layer_height=0.2,
        edge_fillet=0.4,
        build_volume_width=100.0,
        build_volume_depth=100.0,
        build_volume_height=100.0,
        box_width=25.4,
        box_depth=25.4,
        box_height=25.4,
    )


@pytest.fixture
def sharp_box(scenario_a):
    return scenario_a.replace(edge_fillet=0.0)
