# --- roomgraph_lib/analysis/classifier.py ---
import logging
from typing import List, Tuple

import numpy as np

from .labeler import Label
from .segmenter import Region

log = logging.getLogger("roomgraph.segment")


def classify_regions(
    regions: List[Region], labels: np.ndarray
) -> Tuple[List[Region], List[Region]]:
    """Splits regions into points and joints by the label of their first cell."""
    points, joints = [], []
    for region in regions:
        x, y = region.cells[0]
        label = labels[y, x]
        if label == Label.POINT:
            points.append(region)
        elif label == Label.JOINT:
            joints.append(region)

    log.info("Classified regions: %d points, %d joints.", len(points), len(joints))
    return points, joints
