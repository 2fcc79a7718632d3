"""
Boundary Merger
Continuous top reinforcement over a support is annotated once but belongs to
both beams meeting there. For each adjacent pair of spans, top-side bar labels
in the gap between them or inside either boundary band are copied into the
left beam's right-top field and the right beam's left-top field.
"""

import logging
import re
from typing import List, Dict, Iterable

from .config import PipelineConfig
from .primitives import TextLabel
from .spans import Span
from .zones import ZoneThresholds

logger = logging.getLogger(__name__)

BAR_SEPARATORS = re.compile(r'[,\n\r]')


def split_bars(text: str) -> List[str]:
    """Split a bar field into trimmed, non-empty entries."""
    if not text or not text.strip():
        return []
    return [p.strip() for p in BAR_SEPARATORS.split(text) if p.strip()]


def merge_bars(existing: str, extras: Iterable[str]) -> str:
    """
    Union of bar entries, case-insensitive, first spelling and order kept.

    merge_bars("A1", ["a1", "B2"]) -> "A1, B2"
    """
    seen = set()
    merged = []
    for source in [existing, *extras]:
        for bar in split_bars(source):
            key = bar.casefold()
            if key not in seen:
                seen.add(key)
                merged.append(bar)
    return ", ".join(merged)


class BoundaryMerger:
    """Finds bars shared across supports between adjacent spans."""

    def __init__(self, config: PipelineConfig = None):
        self.config = config or PipelineConfig()

    def shared_candidates(self, a: Span, b: Span, labels: List[TextLabel]) -> List[str]:
        """
        Bar texts shared by span `a` and the span `b` to its right.

        A label qualifies when it sits at or above the lower of the two
        centerlines and its X is in the gap between the spans, in a's right
        third, or in b's left third.
        """
        tol = self.config.x_tol
        a_right_min = ZoneThresholds.for_span(a).right_min_x
        b_left_max = ZoneThresholds.for_span(b).left_max_x
        top_y = min(a.center_y, b.center_y)

        shared = []
        for label in labels:
            x, y = label.center
            if y < top_y:
                continue
            in_gap = a.max_x < x < b.min_x
            in_a_band = a_right_min <= x <= a.max_x + tol
            in_b_band = b.min_x - tol <= x <= b_left_max
            if in_gap or in_a_band or in_b_band:
                shared.append(label.text.strip())
        return shared

    def merge(self, spans: List[Span], labels: List[TextLabel]) -> Dict[int, Dict[str, List[str]]]:
        """
        Shared bars for every support in a left-to-right span list.

        Returns:
            index -> {"left_top": [...], "right_top": [...]} holding the texts
            to merge into that span's top fields. Both sides of a support get
            the same list.
        """
        shared: Dict[int, Dict[str, List[str]]] = {}

        for i in range(len(spans) - 1):
            candidates = self.shared_candidates(spans[i], spans[i + 1], labels)
            if not candidates:
                continue

            shared.setdefault(i, {}).setdefault("right_top", []).extend(candidates)
            shared.setdefault(i + 1, {}).setdefault("left_top", []).extend(candidates)
            logger.debug(f"Support {i}|{i + 1}: shared top bars {candidates}")

        logger.info(f"Boundary merge: {sum(1 for v in shared.values() if 'right_top' in v)} "
                    f"supports with shared top bars")
        return shared
