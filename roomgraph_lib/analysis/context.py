# --- roomgraph_lib/analysis/context.py ---
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from .graph import RegionIndex
from .segmenter import Region


@dataclass
class _FloorAnalysisContext:
    """Internal data carrier for a single floor's analysis pipeline."""

    labels: np.ndarray
    regions: List[Region] = field(default_factory=list)
    points: List[Region] = field(default_factory=list)
    joints: List[Region] = field(default_factory=list)
    index: Optional[RegionIndex] = None
