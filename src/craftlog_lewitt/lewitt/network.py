"""Nearest-neighbor network over the boundary points of a whole grid.

Every point is joined to its ``k`` nearest other points. Candidates at
equal distance keep index order, and an edge found from both ends is
emitted once, at its first discovery. Distances are computed one row at
a time so memory stays linear in the number of points.
"""

from __future__ import annotations

from typing import List, Sequence, Tuple

import numpy as np

from ..geometry import Point


def nearest_neighbor_edges(points: Sequence[Point], k: int = 2) -> List[Tuple[int, int]]:
    """Return undirected edges ``(i, j)`` in discovery order.

    ``i`` is the point whose neighbor search found the edge.
    """
    n = len(points)
    if n < 2 or k < 1:
        return []

    coords = np.asarray(points, dtype=np.float64)
    xs = coords[:, 0]
    ys = coords[:, 1]
    take = min(k, n - 1)

    seen = set()
    edges: List[Tuple[int, int]] = []

    for i in range(n):
        dx = xs - xs[i]
        dy = ys - ys[i]
        dist = np.sqrt(dx * dx + dy * dy)
        dist[i] = np.inf

        # Everything at or below the take-th smallest distance, then a
        # stable sort so ties resolve by index
        kth = np.partition(dist, take - 1)[take - 1]
        candidates = np.flatnonzero(dist <= kth)
        nearest = candidates[np.argsort(dist[candidates], kind="stable")][:take]

        for j in nearest.tolist():
            key = (i, j) if i < j else (j, i)
            if key in seen:
                continue
            seen.add(key)
            edges.append((i, j))

    return edges
