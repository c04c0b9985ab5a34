# --- roomgraph_lib/rendering/ascii_renderer.py ---
from typing import List, Sequence

import numpy as np

from roomgraph_lib.analysis.labeler import Label
from roomgraph_lib.analysis.segmenter import Region


class ASCIIRenderer:
    """Renders the label buffer as ASCII art for debugging."""

    SYMBOLS = {Label.EMPTY: ".", Label.POINT: "P", Label.JOINT: "J"}
    CENTROID = "*"

    def __init__(self):
        self.canvas: List[List[str]] = []
        self.width = 0
        self.height = 0

    def render_from_labels(self, labels: np.ndarray, points: Sequence[Region] = ()):
        self.height, self.width = labels.shape
        self.canvas = [
            [self.SYMBOLS.get(v, "?") for v in row] for row in labels.tolist()
        ]
        for point in points:
            x, y = point.position()
            if 0 <= y < self.height and 0 <= x < self.width:
                self.canvas[y][x] = self.CENTROID

    def get_output(self) -> str:
        return "\n".join("".join(row) for row in self.canvas)
