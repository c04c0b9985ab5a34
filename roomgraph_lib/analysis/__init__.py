from .reader import FloorReader, build_floor
from .session import LabelingSession

__all__ = ["FloorReader", "LabelingSession", "build_floor"]
