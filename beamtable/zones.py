"""
Zone Classifier
Splits a span into left/mid/right thirds and buckets bar, stirrup and
dimension annotations into them.

Bars above the centerline are top bars, below are bottom bars. Throughout
bars "(T)" run the full length and land in every zone; curtailed bars "(C)"
or "EXTRA" land in the one zone under their label. Unmarked bars are not
tabulated.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Dict, Tuple, Optional, Iterable

from .config import PipelineConfig
from .primitives import TextLabel, DimensionMark
from .spans import Span
from .units import mm_to_m

logger = logging.getLogger(__name__)


class Zone(Enum):
    LEFT = "left"
    MID = "mid"
    RIGHT = "right"


class Face(Enum):
    BOTTOM = "bottom"
    TOP = "top"


@dataclass(frozen=True)
class ZoneThresholds:
    """Third points of a span. Threshold hits are inclusive."""
    left_max_x: float
    right_min_x: float

    @classmethod
    def for_span(cls, span: Span) -> "ZoneThresholds":
        third = span.length / 3.0
        return cls(span.min_x + third, span.max_x - third)

    def zone_of(self, x: float) -> Zone:
        if x <= self.left_max_x:
            return Zone.LEFT
        if x >= self.right_min_x:
            return Zone.RIGHT
        return Zone.MID


@dataclass
class ZoneAssignment:
    """Per-zone results for one span, accumulated before a record is built."""
    bars: Dict[Tuple[Face, Zone], List[str]] = field(default_factory=lambda: {
        (face, zone): [] for face in Face for zone in Zone
    })
    stirrups: Dict[Zone, Tuple[str, str]] = field(default_factory=dict)  # zone -> (dia, spacing)
    dimensions: Dict[Zone, str] = field(default_factory=dict)  # zone -> meters, 1dp

    def bar_text(self, face: Face, zone: Zone) -> str:
        return ", ".join(distinct(self.bars[(face, zone)]))


def distinct(items: Iterable[str]) -> List[str]:
    """Exact-match de-duplication keeping first occurrences."""
    seen = set()
    out = []
    for item in items:
        if item not in seen:
            seen.add(item)
            out.append(item)
    return out


def contains_ci(text: str, marker: str) -> bool:
    if text is None or marker is None:
        return False
    return marker.lower() in text.lower()


def parse_stirrup(text: str) -> Optional[Tuple[str, str]]:
    """'8@150' -> ('8', '150'); anything without exactly one '@' -> None."""
    parts = (text or "").split('@')
    if len(parts) != 2:
        return None
    return parts[0].strip(), parts[1].strip()


class ZoneClassifier:
    """Classifies annotations against one span."""

    def __init__(self, config: PipelineConfig = None):
        self.config = config or PipelineConfig()

    def is_throughout(self, text: str) -> bool:
        return any(contains_ci(text, m) for m in self.config.throughout_markers)

    def is_curtailed(self, text: str) -> bool:
        return any(contains_ci(text, m) for m in self.config.curtailed_markers)

    def in_span(self, x: float, span: Span) -> bool:
        return span.contains_x(x, self.config.x_tol)

    def classify(
        self,
        span: Span,
        reinforcement: List[TextLabel],
        stirrups: List[TextLabel],
        dimensions: List[DimensionMark],
        clip_to_span: bool = True
    ) -> ZoneAssignment:
        """
        Classify everything that belongs to `span`.

        Args:
            span: Target span
            reinforcement: B_TEXT labels
            stirrups: ring text labels
            dimensions: B_DIM marks
            clip_to_span: Only consider items whose X lies within the span
                (multi-beam); single-beam diagrams classify everything

        Returns:
            ZoneAssignment
        """
        assignment = ZoneAssignment()
        thresholds = ZoneThresholds.for_span(span)

        if clip_to_span:
            reinforcement = [t for t in reinforcement if self.in_span(t.center[0], span)]

        self._classify_bars(assignment, span, thresholds, reinforcement)
        self._classify_stirrups(assignment, span, thresholds, stirrups, clip_to_span)
        self._classify_dimensions(assignment, span, thresholds, dimensions, clip_to_span)

        return assignment

    def _classify_bars(
        self,
        assignment: ZoneAssignment,
        span: Span,
        thresholds: ZoneThresholds,
        labels: List[TextLabel]
    ) -> None:
        for face in Face:
            if face == Face.BOTTOM:
                group = [t for t in labels if t.center[1] < span.center_y]
            else:
                group = [t for t in labels if t.center[1] >= span.center_y]

            throughout = [t.text.strip() for t in group if self.is_throughout(t.text)]
            for zone in Zone:
                assignment.bars[(face, zone)].extend(throughout)

            for t in group:
                if not self.is_curtailed(t.text):
                    continue
                zone = thresholds.zone_of(t.center[0])
                assignment.bars[(face, zone)].append(t.text.strip())

    def _classify_stirrups(
        self,
        assignment: ZoneAssignment,
        span: Span,
        thresholds: ZoneThresholds,
        labels: List[TextLabel],
        clip_to_span: bool
    ) -> None:
        # Later labels overwrite earlier ones in the same zone
        for label in labels:
            x = label.center[0]
            if clip_to_span and not self.in_span(x, span):
                continue

            parsed = parse_stirrup(label.text)
            if parsed is None:
                logger.debug(f"Ignoring stirrup label without a single '@': {label.text!r}")
                continue

            assignment.stirrups[thresholds.zone_of(x)] = parsed

    def _classify_dimensions(
        self,
        assignment: ZoneAssignment,
        span: Span,
        thresholds: ZoneThresholds,
        marks: List[DimensionMark],
        clip_to_span: bool
    ) -> None:
        for dim in marks:
            x = dim.text_position[0]
            if clip_to_span and not self.in_span(x, span):
                continue

            zone = thresholds.zone_of(x)
            if zone == Zone.MID:
                continue
            assignment.dimensions[zone] = mm_to_m(dim.measurement, places=1)
