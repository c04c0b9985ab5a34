# --- roomgraph_lib/analysis/session.py ---
import logging
import math
from typing import Dict, Optional

from .reader import FloorReader

log = logging.getLogger("roomgraph.session")


class LabelingSession:
    """Tracks which point is selected and what label each point carries.

    A point's displayed text is the label last given to it, or its hash
    while unlabeled. Relabeling substitutes that displayed text in the
    document, so renaming an already-labeled room works the same way as
    labeling a fresh one.
    """

    def __init__(self, reader: FloorReader):
        self.reader = reader
        self.index = 0
        self.labels: Dict[int, str] = {}

    def _count(self) -> int:
        return len(self.reader.points())

    def select(self, index: int):
        if not 0 <= index < self._count():
            raise IndexError(f"Point index {index} out of range (0..{self._count() - 1})")
        self.index = index

    def current_hash(self) -> str:
        return self.reader.points()[self.index].hash()

    def current_text(self) -> str:
        return self.labels.get(self.index, "")

    def label_current(self, text: str) -> bool:
        """Applies `text` to the selected point and advances to the next one."""
        if not text:
            return False
        if not self._count():
            raise IndexError("Floor has no points to label")

        previous = self.labels.get(self.index)
        from_text = previous if previous is not None else self.current_hash()
        count = self.reader.replace(from_text, text)
        log.info("Point %d: '%s' -> '%s' (%d occurrences).", self.index, from_text, text, count)

        self.labels[self.index] = text
        self.index = (self.index + 1) % self._count()
        return True

    def point_near(self, x: float, y: float, radius: float) -> Optional[int]:
        """Returns the index of the first point whose centroid lies within `radius`."""
        for i, point in enumerate(self.reader.points()):
            px, py = point.position()
            if math.hypot(x - px, y - py) < radius:
                return i
        return None
