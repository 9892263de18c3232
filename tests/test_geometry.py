"""Tests for the tri-state point intersection test."""

from shapely.geometry import Point

from advisories.geometry import IntersectionResult, check_intersection, feature_intersects, parse_geometry

from conftest import make_feature, square

POINT = Point(-100.0, 40.0)


class TestCheckIntersection:

    def test_polygon_covering_point(self):
        feature = make_feature("A", square(-100.0, 40.0))

        assert check_intersection(feature, POINT) is IntersectionResult.INTERSECTS

    def test_polygon_elsewhere(self):
        feature = make_feature("B", square(10.0, 10.0))

        assert check_intersection(feature, POINT) is IntersectionResult.DISJOINT

    def test_point_on_boundary_intersects(self):
        feature = make_feature("edge", square(-101.0, 40.0))

        assert check_intersection(feature, POINT) is IntersectionResult.INTERSECTS

    def test_empty_polygon_is_malformed(self):
        feature = make_feature("empty", {"type": "Polygon", "coordinates": [[]]})

        assert check_intersection(feature, POINT) is IntersectionResult.MALFORMED

    def test_too_few_ring_coordinates_is_malformed(self):
        feature = make_feature("short", {"type": "Polygon", "coordinates": [[[-100, 40], [-99, 41]]]})

        assert check_intersection(feature, POINT) is IntersectionResult.MALFORMED

    def test_missing_geometry_is_malformed(self):
        assert check_intersection(make_feature("none", None), POINT) is IntersectionResult.MALFORMED
        assert check_intersection({"id": "bare"}, POINT) is IntersectionResult.MALFORMED

    def test_unknown_geometry_type_is_malformed(self):
        feature = make_feature("odd", {"type": "Blob", "coordinates": [1, 2]})

        assert check_intersection(feature, POINT) is IntersectionResult.MALFORMED

    def test_line_through_point(self):
        feature = make_feature("line", {"type": "LineString", "coordinates": [[-101, 40], [-99, 40]]})

        assert check_intersection(feature, POINT) is IntersectionResult.INTERSECTS

    def test_multipolygon_with_one_covering_part(self):
        geometry = {
            "type": "MultiPolygon",
            "coordinates": [square(10.0, 10.0)["coordinates"], square(-100.0, 40.0)["coordinates"]]
        }

        assert check_intersection(make_feature("multi", geometry), POINT) is IntersectionResult.INTERSECTS


class TestFeatureIntersects:

    def test_malformed_collapses_to_false(self):
        feature = make_feature("empty", {"type": "Polygon", "coordinates": [[]]})

        assert feature_intersects(feature, -100.0, 40.0) is False

    def test_uses_lon_lat_order(self):
        feature = make_feature("A", square(-100.0, 40.0))

        assert feature_intersects(feature, lon=-100.0, lat=40.0) is True
        assert feature_intersects(feature, lon=40.0, lat=-100.0) is False

    def test_parse_geometry_returns_none_for_empty(self):
        assert parse_geometry(make_feature("empty", {"type": "Polygon", "coordinates": [[]]})) is None
