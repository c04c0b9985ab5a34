# --- roomgraph_lib/rendering/overlay.py ---
import logging
from typing import Iterable, Optional, Sequence

import cv2
import numpy as np

from roomgraph_lib.analysis.labeler import Label
from roomgraph_lib.analysis.segmenter import Region

log = logging.getLogger("roomgraph.render")

POINT_RADIUS = 15
LABELED_RADIUS = 8

# BGR
POINT_COLOR = (0, 140, 255)
JOINT_COLOR = (255, 160, 0)
SELECTED_COLOR = (0, 0, 255)
LABELED_COLOR = (0, 255, 0)


def render_overlay(
    labels: np.ndarray,
    points: Sequence[Region],
    background: Optional[np.ndarray] = None,
    selected: Optional[int] = None,
    labeled: Iterable[int] = (),
) -> np.ndarray:
    """
    Draws the composite label map over the background, with point markers.

    Args:
        labels: The (height, width) label buffer.
        points: Point regions, in user-facing order.
        background: Optional BGR image of the same size as `labels`.
        selected: Index of the point drawn with the large red marker.
        labeled: Indices of points drawn with the small green marker.

    Returns:
        A BGR image.
    """
    height, width = labels.shape
    if background is not None and background.shape[:2] == (height, width):
        canvas = background.copy()
    else:
        if background is not None:
            log.warning(
                "Background size %s does not match label buffer %s; ignoring it.",
                background.shape[:2],
                (height, width),
            )
        canvas = np.full((height, width, 3), 255, dtype=np.uint8)

    canvas[labels == Label.POINT] = POINT_COLOR
    canvas[labels == Label.JOINT] = JOINT_COLOR

    if selected is not None and 0 <= selected < len(points):
        cv2.circle(canvas, points[selected].position(), POINT_RADIUS, SELECTED_COLOR, -1)
    for i in labeled:
        if 0 <= i < len(points):
            cv2.circle(canvas, points[i].position(), LABELED_RADIUS, LABELED_COLOR, -1)

    return canvas


def save_overlay(path: str, image: np.ndarray):
    if not cv2.imwrite(path, image):
        raise IOError(f"Could not write overlay image to {path}")
    log.info("Saved overlay image to %s", path)
