# --- roomgraph_lib/analysis/labeler.py ---
import logging
from enum import IntEnum

import numpy as np

log = logging.getLogger("roomgraph.label")


class Label(IntEnum):
    """Per-cell category of the composite label buffer."""

    EMPTY = 0
    POINT = 1
    JOINT = 2


class LayerShapeError(ValueError):
    """Raised when the marker layers do not share the same dimensions."""


def build_label_buffer(points_alpha: np.ndarray, joints_alpha: np.ndarray) -> np.ndarray:
    """
    Merges the points and joints alpha layers into one categorical grid.

    A non-zero points alpha wins over a non-zero joints alpha at the same
    cell. The result is a read-only (height, width) uint8 array of Label.
    """
    if points_alpha.shape[:2] != joints_alpha.shape[:2]:
        raise LayerShapeError(
            f"Layer dimensions differ: points {points_alpha.shape[1]}x{points_alpha.shape[0]}, "
            f"joints {joints_alpha.shape[1]}x{joints_alpha.shape[0]}"
        )

    labels = np.full(points_alpha.shape[:2], Label.EMPTY, dtype=np.uint8)
    labels[joints_alpha != 0] = Label.JOINT
    labels[points_alpha != 0] = Label.POINT
    labels.flags.writeable = False

    log.debug(
        "Label buffer built: %d point cells, %d joint cells.",
        int(np.count_nonzero(labels == Label.POINT)),
        int(np.count_nonzero(labels == Label.JOINT)),
    )
    return labels
