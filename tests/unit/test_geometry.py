"""
Tests for plate and landmass geometry.
"""

import re

from depmap_core.domain import RegionType
from depmap_core.services import RegionGeometry, color_for_name
from depmap_core.services.geometry import (
    clip_half_plane,
    convex_hull,
    point_in_polygon,
    voronoi_cells,
)


class TestColor:

    def test_format_and_determinism(self):
        for name in ["root", "src/lib", "a"]:
            assert re.fullmatch(r"#[0-9A-F]{6}", color_for_name(name))
            assert color_for_name(name) == color_for_name(name)

    def test_known_values(self):
        assert color_for_name("") == "#000000"
        assert color_for_name("a") == "#000061"
        assert color_for_name("ab") == "#000C21"


class TestPolygonHelpers:

    def test_hull_drops_interior_points(self):
        square = [(0, 0), (10, 0), (10, 10), (0, 10), (5, 5)]
        assert sorted(convex_hull(square)) == [(0, 0), (0, 10), (10, 0), (10, 10)]

    def test_hull_degenerate(self):
        assert convex_hull([(0, 0), (1, 1)]) == []
        assert convex_hull([(0, 0), (1, 1), (2, 2)]) == []

    def test_clip_half_plane(self):
        square = [(0, 0), (10, 0), (10, 10), (0, 10)]
        clipped = clip_half_plane(square, 1, 0, 5)  # x <= 5
        assert max(x for x, _ in clipped) == 5
        assert len(clipped) == 4

    def test_voronoi_two_sites(self):
        cells = voronoi_cells([(-10, 0), (10, 0)], (-100, -100, 100, 100))
        assert max(x for x, _ in cells[0]) == 0
        assert min(x for x, _ in cells[1]) == 0

    def test_point_in_polygon(self):
        square = [(0, 0), (10, 0), (10, 10), (0, 10)]
        assert point_in_polygon(5, 5, square)
        assert not point_in_polygon(15, 5, square)


class TestRegionGeometry:

    POSITIONS = {"0": (0.0, 0.0), "1": (200.0, 0.0), "2": (100.0, 200.0), "3": (20.0, 10.0)}
    DIRECTORIES = {"0": "root", "1": "lib", "2": "app", "3": "root"}

    def test_too_few_nodes(self):
        landforms = RegionGeometry().compute({"0": (0, 0), "1": (5, 5)}, {"0": "a", "1": "b"})
        assert landforms.is_empty

    def test_one_plate_per_directory(self):
        landforms = RegionGeometry().compute(self.POSITIONS, self.DIRECTORIES)
        assert sorted(p.region_id for p in landforms.plates) == ["app", "lib", "root"]
        for plate in landforms.plates:
            assert plate.region_type == RegionType.PLATE
            assert plate.color == color_for_name(plate.region_id)

    def test_centroid_inside_own_plate(self):
        landforms = RegionGeometry().compute(self.POSITIONS, self.DIRECTORIES)
        assert landforms.centroids["root"] == (10.0, 5.0)
        for plate in landforms.plates:
            cx, cy = landforms.centroids[plate.region_id]
            assert point_in_polygon(cx, cy, plate.polygon)

    def test_landmass_covers_nodes(self):
        landforms = RegionGeometry().compute(self.POSITIONS, self.DIRECTORIES)
        landmass = landforms.landmass
        assert landmass.region_id == "global_landmass"
        assert landmass.color == "#111111"
        assert landmass.region_type == RegionType.LANDMASS
        for x, y in self.POSITIONS.values():
            # Clearance of the padding on every side
            for dx, dy in [(-79, 0), (79, 0), (0, -79), (0, 79)]:
                assert point_in_polygon(x + dx, y + dy, landmass.polygon)

    def test_coincident_centroids(self):
        positions = {"0": (0.0, 0.0), "1": (0.0, 0.0), "2": (100.0, 0.0)}
        directories = {"0": "a", "1": "b", "2": "c"}
        landforms = RegionGeometry().compute(positions, directories)
        assert sorted(p.region_id for p in landforms.plates) == ["a", "b", "c"]

    def test_positions_untouched(self):
        positions = dict(self.POSITIONS)
        RegionGeometry().compute(positions, self.DIRECTORIES)
        assert positions == self.POSITIONS
