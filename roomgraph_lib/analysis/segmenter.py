# --- roomgraph_lib/analysis/segmenter.py ---
import logging
from dataclasses import dataclass, field
from typing import Iterator, List, Tuple

import numpy as np

from .labeler import Label

log = logging.getLogger("roomgraph.segment")

Cell = Tuple[int, int]


@dataclass
class Region:
    """A maximal 8-connected group of same-label cells."""

    cells: List[Cell]
    label: Label
    connections: List[str] = field(default_factory=list)

    def position(self) -> Cell:
        """Integer-truncated centroid of the region's cells."""
        n = len(self.cells)
        x_sum = sum(x for x, _ in self.cells)
        y_sum = sum(y for _, y in self.cells)
        return x_sum // n, y_sum // n

    def hash(self) -> str:
        # (1, 23) and (12, 3) both give "123"; kept for document compatibility.
        x, y = self.position()
        return f"{x}{y}"


def neighbors8(cell: Cell, width: int, height: int) -> Iterator[Cell]:
    """Yields the in-bounds cells within Chebyshev distance 1, excluding `cell`."""
    x, y = cell
    for dy in (-1, 0, 1):
        for dx in (-1, 0, 1):
            if dx == 0 and dy == 0:
                continue
            nx, ny = x + dx, y + dy
            if 0 <= nx < width and 0 <= ny < height:
                yield nx, ny


def flood_fill(labels: np.ndarray, visited: np.ndarray, seed: Cell) -> List[Cell]:
    """Collects every cell 8-connected to `seed` with the seed's label."""
    height, width = labels.shape
    sx, sy = seed
    label = labels[sy, sx]
    visited[sy, sx] = True
    stack = [seed]
    cells = []

    while stack:
        cell = stack.pop()
        cells.append(cell)
        for nx, ny in neighbors8(cell, width, height):
            if not visited[ny, nx] and labels[ny, nx] == label:
                visited[ny, nx] = True
                stack.append((nx, ny))
    return cells


def segment(labels: np.ndarray) -> List[Region]:
    """
    Partitions every non-empty cell of the label buffer into regions.

    Cells are scanned in row-major order, so region discovery order (and
    with it the user-facing point order) is deterministic.
    """
    log.info("Segmenting label buffer into regions...")
    height, width = labels.shape
    visited = np.zeros((height, width), dtype=bool)
    regions = []

    # argwhere yields (row, col) pairs in row-major order.
    for y, x in np.argwhere(labels != Label.EMPTY).tolist():
        if visited[y, x]:
            continue
        cells = flood_fill(labels, visited, (x, y))
        regions.append(Region(cells=cells, label=Label(int(labels[y, x]))))

    log.info("Found %d regions.", len(regions))
    return regions
