# --- roomgraph_lib/analysis/layers.py ---
import logging
import os
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

import cv2
import numpy as np

log = logging.getLogger("roomgraph.layers")


def floor_directory(assets_root: str, floor: int) -> str:
    return os.path.join(assets_root, f"Floor {floor}")


def floor_save_path(assets_root: str, floor: int) -> str:
    """Per-floor document path: <assets_root>/Floor <N>/floor-<N>.json"""
    return os.path.join(floor_directory(assets_root, floor), f"floor-{floor}.json")


def load_alpha(path: str) -> np.ndarray:
    """
    Reads an image layer and returns its alpha channel.

    Args:
        path: Path to a PNG (or any cv2-readable) layer.

    Returns:
        A (height, width) uint8 array. Layers without an alpha channel are
        treated as fully opaque.
    """
    img = cv2.imread(path, cv2.IMREAD_UNCHANGED)
    if img is None:
        raise FileNotFoundError(f"Could not read image layer at {path}")

    if img.ndim == 3 and img.shape[2] == 4:
        alpha = img[:, :, 3]
    else:
        log.warning("Layer '%s' has no alpha channel; treating it as opaque.", path)
        alpha = np.full(img.shape[:2], 255, dtype=np.uint8)

    if alpha.dtype != np.uint8:
        # 16-bit PNGs: only zero vs. non-zero matters downstream.
        alpha = (alpha > 0).astype(np.uint8) * 255
    log.debug("Loaded layer '%s' (%dx%d).", path, alpha.shape[1], alpha.shape[0])
    return np.ascontiguousarray(alpha)


@dataclass
class FloorLayers:
    """The decoded marker layers of one floor, plus the background's location."""

    points_alpha: np.ndarray
    joints_alpha: np.ndarray
    background_path: Optional[str] = None

    @classmethod
    def from_directory(cls, directory: str, settings: Dict[str, Dict[str, str]]):
        assets = settings["Assets"]
        log.info("Loading floor layers from '%s'...", directory)
        points_alpha = load_alpha(os.path.join(directory, assets["points_layer"]))
        joints_alpha = load_alpha(os.path.join(directory, assets["joints_layer"]))
        background_path = os.path.join(directory, assets["background_layer"])
        return cls(points_alpha, joints_alpha, background_path)

    def dimensions(self) -> Tuple[int, int]:
        height, width = self.points_alpha.shape[:2]
        return width, height

    def alpha_at(self, layer: str, cell: Tuple[int, int]) -> bool:
        x, y = cell
        if layer == "points":
            return bool(self.points_alpha[y, x])
        if layer == "joints":
            return bool(self.joints_alpha[y, x])
        raise ValueError(f"Unknown marker layer '{layer}'")

    def background_image(self) -> Optional[np.ndarray]:
        """Loads the decorative background as a BGR image, if one exists."""
        if not self.background_path or not os.path.exists(self.background_path):
            log.debug("No background layer found at '%s'.", self.background_path)
            return None
        img = cv2.imread(self.background_path, cv2.IMREAD_COLOR)
        if img is None:
            raise FileNotFoundError(f"Could not read background at {self.background_path}")
        return img
