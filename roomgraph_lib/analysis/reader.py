# --- roomgraph_lib/analysis/reader.py ---
import logging
from typing import Dict, Optional, Tuple

import numpy as np

from roomgraph_lib.config import default_settings
from roomgraph_lib.schema import RoomDocument
from .classifier import classify_regions
from .context import _FloorAnalysisContext
from .graph import RegionIndex, build_connections
from .labeler import build_label_buffer
from .layers import FloorLayers, floor_directory, floor_save_path
from .segmenter import Region, segment

log = logging.getLogger("roomgraph.main")


def build_floor(points_alpha: np.ndarray, joints_alpha: np.ndarray) -> _FloorAnalysisContext:
    """Runs labeling, segmentation, indexing, graph building and classification."""
    labels = build_label_buffer(points_alpha, joints_alpha)
    context = _FloorAnalysisContext(labels=labels)
    context.regions = segment(labels)
    context.index = RegionIndex(context.regions, labels)
    build_connections(context.regions, context.index)
    context.points, context.joints = classify_regions(context.regions, labels)
    return context


class FloorReader:
    """Orchestrates the topology extraction pipeline for a single floor."""

    def __init__(
        self,
        floor: int,
        assets_root: Optional[str] = None,
        settings: Optional[Dict[str, Dict[str, str]]] = None,
    ):
        self.floor = floor
        self.settings = settings or default_settings()
        self.assets_root = assets_root or self.settings["Assets"]["root"]
        self.directory = floor_directory(self.assets_root, floor)
        self.save_path = floor_save_path(self.assets_root, floor)
        self.layers: Optional[FloorLayers] = None
        self.context: Optional[_FloorAnalysisContext] = None
        self.document: Optional[RoomDocument] = None

    def build_data(self) -> RoomDocument:
        """Loads the floor's layers and builds its room document."""
        log.info("Processing floor %d from '%s'", self.floor, self.directory)
        self.layers = FloorLayers.from_directory(self.directory, self.settings)
        self.context = build_floor(self.layers.points_alpha, self.layers.joints_alpha)

        indent = int(self.settings["Output"]["indent"])
        self.document = RoomDocument.from_points(self.context.points, self.floor, indent)
        log.info(
            "Floor %d: %d points, %d joints.",
            self.floor,
            len(self.context.points),
            len(self.context.joints),
        )
        return self.document

    def _require_context(self) -> _FloorAnalysisContext:
        if self.context is None:
            raise RuntimeError("build_data() must be called first")
        return self.context

    def points(self) -> Tuple[Region, ...]:
        return tuple(self._require_context().points)

    def joints(self) -> Tuple[Region, ...]:
        return tuple(self._require_context().joints)

    def regions(self) -> Tuple[Region, ...]:
        return tuple(self._require_context().regions)

    def labels(self) -> np.ndarray:
        return self._require_context().labels

    def width(self) -> int:
        return self.labels().shape[1]

    def height(self) -> int:
        return self.labels().shape[0]

    def background_image(self) -> Optional[np.ndarray]:
        if self.layers is None:
            return None
        return self.layers.background_image()

    def replace(self, from_text: str, to_text: str) -> int:
        self._require_context()
        return self.document.replace(from_text, to_text)

    def save(self) -> str:
        """Writes the live document to the per-floor save path."""
        self._require_context()
        self.document.save(self.save_path)
        return self.save_path
