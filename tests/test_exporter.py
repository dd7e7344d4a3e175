"""Tests for STL/STEP export and measurements."""
import io
import math

import pytest
import trimesh

from boxgen.services.exporter import (
    ExportError,
    angular_tolerance,
    export_base64,
    export_solid,
    measure,
)
from boxgen.services.generator import generate


@pytest.fixture
def sharp_solid(sharp_box):
    return generate(sharp_box).solid


def _load_stl(data: bytes) -> trimesh.Trimesh:
    return trimesh.load(io.BytesIO(data), file_type="stl", force="mesh")


class TestExport:

    def test_angular_tolerance_from_segments(self):
        assert angular_tolerance(16) == pytest.approx(math.pi / 8)

    def test_binary_stl_is_watertight(self, sharp_solid):
        data = export_solid(sharp_solid, "stl")
        assert not data.startswith(b"solid")
        mesh = _load_stl(data)
        assert mesh.is_watertight
        assert mesh.volume == pytest.approx(25.4 ** 3 - 23.4 * 23.4 * 24.4, rel=1e-3)

    def test_ascii_stl(self, sharp_solid):
        data = export_solid(sharp_solid, "stl", ascii=True)
        assert data.lstrip().startswith(b"solid")

    def test_step(self, sharp_solid):
        data = export_solid(sharp_solid, "step")
        assert b"ISO-10303-21" in data

    def test_base64(self, sharp_solid):
        assert isinstance(export_base64(sharp_solid, "stl"), str)

    def test_unknown_format(self, sharp_solid):
        with pytest.raises(ExportError, match="Unsupported"):
            export_solid(sharp_solid, "obj")


class TestMeasure:

    def test_sharp_box_metrics(self, sharp_solid):
        metrics = measure(sharp_solid)
        assert metrics["size"] == pytest.approx([25.4, 25.4, 25.4], abs=0.01)
        assert metrics["bounding_box"]["min"][2] == pytest.approx(0.0, abs=0.01)
        assert metrics["solid_count"] == 1
        assert metrics["volume"] == pytest.approx(3026.6, abs=0.05)

    def test_rounded_box_metrics_match_mesh(self, scenario_a):
        solid = generate(scenario_a).solid
        metrics = measure(solid)
        assert metrics["solid_count"] == 1
        mesh = _load_stl(export_solid(solid, "stl"))
        assert mesh.is_watertight
        assert metrics["volume"] == pytest.approx(mesh.volume, rel=0.02)
