"""
Primitive Collector
Partitions a flat primitive snapshot into typed buckets by layer and kind.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Iterable

from .config import LayerNames
from .primitives import Primitive, TextLabel, Line, Polygon, DimensionMark

logger = logging.getLogger(__name__)


@dataclass
class CollectedPrimitives:
    """Primitives grouped by the role they play in a beam diagram."""
    id_labels: List[TextLabel] = field(default_factory=list)
    reinforcement_labels: List[TextLabel] = field(default_factory=list)
    stirrup_labels: List[TextLabel] = field(default_factory=list)
    dimension_marks: List[DimensionMark] = field(default_factory=list)
    boundary_lines: List[Line] = field(default_factory=list)
    boundary_polygons: List[Polygon] = field(default_factory=list)
    auxiliary_lines: List[Line] = field(default_factory=list)
    level: str = ""
    ignored: int = 0

    @property
    def total(self) -> int:
        return (len(self.id_labels) + len(self.reinforcement_labels) +
                len(self.stirrup_labels) + len(self.dimension_marks) +
                len(self.boundary_lines) + len(self.boundary_polygons) +
                len(self.auxiliary_lines))


def collect(primitives: Iterable[Primitive], layers: LayerNames = None) -> CollectedPrimitives:
    """
    Sort primitives into buckets.

    Unrecognised (layer, kind) combinations are skipped. When several level
    labels are present the last one wins.
    """
    layers = layers or LayerNames()
    result = CollectedPrimitives()

    for prim in primitives:
        if isinstance(prim, TextLabel):
            if prim.layer == layers.beam_id:
                result.id_labels.append(prim)
            elif prim.layer == layers.reinforcement:
                result.reinforcement_labels.append(prim)
            elif prim.layer == layers.stirrup:
                result.stirrup_labels.append(prim)
            elif prim.layer == layers.level:
                result.level = prim.text or ""
            else:
                result.ignored += 1
        elif isinstance(prim, DimensionMark) and prim.layer == layers.dimension:
            result.dimension_marks.append(prim)
        elif isinstance(prim, Line) and prim.layer == layers.boundary:
            result.boundary_lines.append(prim)
        elif isinstance(prim, Line) and prim.layer == layers.auxiliary:
            result.auxiliary_lines.append(prim)
        elif isinstance(prim, Polygon) and prim.layer == layers.boundary:
            result.boundary_polygons.append(prim)
        else:
            result.ignored += 1

    logger.info(f"Collected {result.total} primitives "
                f"({len(result.id_labels)} IDs, {len(result.reinforcement_labels)} bars, "
                f"{len(result.stirrup_labels)} stirrups, {len(result.dimension_marks)} dims), "
                f"ignored {result.ignored}")
    return result
