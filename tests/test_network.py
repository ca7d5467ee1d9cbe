"""Tests for the nearest-neighbor point network."""

from craftlog_lewitt.geometry import Point
from craftlog_lewitt.lewitt import nearest_neighbor_edges


class TestNearestNeighborEdges:
    def test_fewer_than_two_points(self):
        assert nearest_neighbor_edges([]) == []
        assert nearest_neighbor_edges([Point(0, 0)]) == []

    def test_two_points_one_edge(self):
        assert nearest_neighbor_edges([Point(0, 0), Point(3, 4)]) == [(0, 1)]

    def test_discovery_order_and_dedupe(self):
        points = [Point(0, 0), Point(1, 0), Point(2, 0), Point(10, 0)]
        assert nearest_neighbor_edges(points) == [(0, 1), (0, 2), (1, 2), (3, 2), (3, 1)]

    def test_ties_resolve_by_index(self):
        """Equidistant candidates are taken in index order."""
        points = [Point(0, 0), Point(1, 0), Point(-1, 0), Point(0, 1), Point(0, -1)]
        edges = nearest_neighbor_edges(points)
        assert edges[:2] == [(0, 1), (0, 2)]

    def test_every_point_has_an_edge(self):
        points = [Point(x * 7 % 13, x * 5 % 11) for x in range(30)]
        edges = nearest_neighbor_edges(points)
        touched = {i for edge in edges for i in edge}
        assert touched == set(range(30))
        assert len(edges) == len({frozenset(e) for e in edges})
        assert len(edges) <= 2 * len(points)

    def test_k_one(self):
        points = [Point(0, 0), Point(1, 0), Point(5, 0)]
        assert nearest_neighbor_edges(points, k=1) == [(0, 1), (2, 1)]
