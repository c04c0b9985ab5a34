import os

import cv2
import numpy as np
import pytest


def layers_from_art(rows):
    """
    Builds (points_alpha, joints_alpha) from ASCII art.

    'P' marks the points layer, 'J' the joints layer, 'B' both, anything else
    is transparent.
    """
    height, width = len(rows), len(rows[0])
    points = np.zeros((height, width), dtype=np.uint8)
    joints = np.zeros((height, width), dtype=np.uint8)
    for y, row in enumerate(rows):
        for x, ch in enumerate(row):
            if ch in "PB":
                points[y, x] = 255
            if ch in "JB":
                joints[y, x] = 255
    return points, joints


def write_rgba(path, alpha):
    img = np.zeros(alpha.shape + (4,), dtype=np.uint8)
    img[:, :, 2] = 200
    img[:, :, 3] = alpha
    assert cv2.imwrite(path, img)


@pytest.fixture
def make_floor(tmp_path):
    """Writes points/joints/bg layers for a floor under a temporary assets root."""

    def _make(rows, floor=1, background=True):
        points, joints = layers_from_art(rows)
        directory = os.path.join(str(tmp_path), f"Floor {floor}")
        os.makedirs(directory, exist_ok=True)
        write_rgba(os.path.join(directory, "points.PNG"), points)
        write_rgba(os.path.join(directory, "joints.PNG"), joints)
        if background:
            bg = np.full(points.shape + (3,), 90, dtype=np.uint8)
            assert cv2.imwrite(os.path.join(directory, "bg.PNG"), bg)
        return str(tmp_path)

    return _make
