# --- roomgraph_lib/analysis/graph.py ---
import logging
from typing import Dict, List, Optional

import numpy as np

from .labeler import Label
from .segmenter import Cell, Region

log = logging.getLogger("roomgraph.graph")

# Half of the 8-neighbourhood as (dy, dx); each pair is mirrored afterwards.
_HALF_NEIGHBOURHOOD = ((0, 1), (1, 0), (1, 1), (1, -1))


class RegionLookupError(RuntimeError):
    """A marked cell has no owning region; the segmentation state is corrupt."""


def _shifted_views(grid: np.ndarray, dy: int, dx: int):
    """Returns (grid[y, x], grid[y + dy, x + dx]) views over the overlapping area."""
    h, w = grid.shape
    src = grid[0 : h - dy, max(0, -dx) : w - max(0, dx)]
    dst = grid[dy:h, max(0, dx) : w - max(0, -dx)]
    return src, dst


class RegionIndex:
    """Coordinate-to-region lookup, built once right after segmentation."""

    def __init__(self, regions: List[Region], labels: np.ndarray):
        self.regions = regions
        self.labels = labels
        self.height, self.width = labels.shape
        self.owner = np.full((self.height, self.width), -1, dtype=np.int32)
        for i, region in enumerate(regions):
            xs, ys = zip(*region.cells)
            self.owner[list(ys), list(xs)] = i
        self._adjacency: Optional[Dict[int, List[int]]] = None
        log.debug("Indexed %d regions over a %dx%d grid.", len(regions), self.width, self.height)

    def index_at(self, cell: Cell) -> int:
        x, y = cell
        i = int(self.owner[y, x])
        if i < 0:
            raise RegionLookupError(f"No region owns marked cell {cell}")
        return i

    def region_at(self, cell: Cell) -> Region:
        return self.regions[self.index_at(cell)]

    def _build_adjacency(self) -> Dict[int, List[int]]:
        """Finds every touching pair of differently-labeled regions in one pass."""
        orphans = np.argwhere((self.labels != Label.EMPTY) & (self.owner < 0))
        if len(orphans):
            y, x = orphans[0].tolist()
            raise RegionLookupError(
                f"No region owns marked cell {(x, y)} ({len(orphans)} orphaned cells)"
            )

        pairs = [np.empty((0, 2), dtype=np.int32)]
        for dy, dx in _HALF_NEIGHBOURHOOD:
            a, b = _shifted_views(self.owner, dy, dx)
            la, lb = _shifted_views(self.labels, dy, dx)
            touching = (a >= 0) & (b >= 0) & (la != lb)
            found = np.stack([a[touching], b[touching]], axis=1)
            pairs.extend([found, found[:, ::-1]])

        all_pairs = np.concatenate(pairs)
        unique_pairs = np.unique(all_pairs, axis=0) if len(all_pairs) else all_pairs
        adjacency: Dict[int, List[int]] = {i: [] for i in range(len(self.regions))}
        for i, j in unique_pairs.tolist():
            adjacency[i].append(j)
        log.debug("Found %d touching region pairs.", len(unique_pairs) // 2)
        return adjacency

    def neighbours(self, i: int) -> List[int]:
        """Indices of the regions touching region `i`, in discovery order."""
        if self._adjacency is None:
            self._adjacency = self._build_adjacency()
        return self._adjacency[i]

    def adjacent(self, region: Region) -> List[Region]:
        """
        Returns the regions of a different label touching `region`.

        A region touches another when any of their cells are within
        Chebyshev distance 1. Each neighbour is returned once, in region
        discovery order. The full adjacency is computed on first use and
        reused for every later query.
        """
        return [self.regions[j] for j in self.neighbours(self.index_at(region.cells[0]))]


def build_connections(regions: List[Region], index: RegionIndex) -> int:
    """
    Links every point region to each region reachable through one joint.

    For a point `p`, every region adjacent to a region adjacent to `p` gets
    its identity appended to `p.connections`, unless that identity equals
    `p`'s own. Edges reached through several joints are recorded once per
    joint.

    Returns:
        The total number of edges recorded.
    """
    log.info("Building point connectivity graph...")
    identities = [region.hash() for region in index.regions]
    edges = 0
    for point in regions:
        if point.label != Label.POINT:
            continue
        p = index.index_at(point.cells[0])
        for joint in index.neighbours(p):
            for other in index.neighbours(joint):
                if identities[other] == identities[p]:
                    continue
                point.connections.append(identities[other])
                edges += 1
        log.debug("Point %s -> %s", identities[p], point.connections)

    log.info("Recorded %d connections.", edges)
    return edges
