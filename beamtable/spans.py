"""
Span Resolver
Derives beam spans (horizontal extent + vertical centerline) from B_BOX
geometry. Polygons are preferred; otherwise spans are inferred between
consecutive vertical box lines; otherwise fallbacks keep every beam ID
attached to some span.
"""

import logging
from dataclasses import dataclass
from typing import List, Dict, Optional, Sequence

import numpy as np

from .collector import CollectedPrimitives
from .config import PipelineConfig
from .primitives import Polygon, Line, TextLabel, Point

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Span:
    """Horizontal extent of one beam and the line splitting top from bottom bars."""
    min_x: float
    max_x: float
    center_y: float
    polygon: Optional[Polygon] = None
    source: str = "polygon"  # "polygon", "lines", "nearest", "extent", "fallback"

    @property
    def length(self) -> float:
        return self.max_x - self.min_x

    @property
    def is_valid(self) -> bool:
        return self.max_x > self.min_x

    @property
    def mid_x(self) -> float:
        return (self.min_x + self.max_x) / 2.0

    def contains_x(self, x: float, tol: float) -> bool:
        return self.min_x - tol <= x <= self.max_x + tol


def unique_xs(xs: Sequence[float], decimals: int = 3) -> List[float]:
    """Merge positions that agree to `decimals` places, averaged, sorted ascending."""
    groups: Dict[float, List[float]] = {}
    for x in xs:
        groups.setdefault(round(x, decimals), []).append(x)
    return sorted(float(np.mean(g)) for g in groups.values())


def _mid(a: float, b: float) -> float:
    return (a + b) * 0.5


class SpanResolver:
    """
    Resolves spans for a collected drawing.
    Never raises; the worst case is a degenerate span around a label.
    """

    def __init__(self, config: PipelineConfig = None):
        self.config = config or PipelineConfig()
        self.x_tol = self.config.x_tol
        self.y_tol = self.config.y_tol

    # ------------------------------------------------------------------
    # Multi-beam
    # ------------------------------------------------------------------

    def polygon_spans(self, polygons: List[Polygon]) -> List[Span]:
        """One span per box outline."""
        spans = []
        for poly in polygons:
            b = poly.bounds
            if b is None:
                continue
            spans.append(Span(
                min_x=b.min_x,
                max_x=b.max_x,
                center_y=_mid(b.min_y, b.max_y),
                polygon=poly,
                source="polygon"
            ))
        return spans

    def line_spans(self, lines: List[Line], reinforcement: List[TextLabel]) -> List[Span]:
        """Spans between adjacent vertical box lines."""
        vertical = [l for l in lines if l.is_vertical(self.x_tol, self.y_tol)]
        xs = unique_xs([l.start[0] for l in vertical])
        if len(xs) < 2:
            return []

        horizontal = [l for l in lines if l.is_horizontal(self.x_tol, self.y_tol)]
        spans = []

        for min_x, max_x in zip(xs, xs[1:]):
            if max_x - min_x < self.config.min_span_width:
                continue

            h_ys = []
            for hl in horizontal:
                x1 = min(hl.start[0], hl.end[0])
                x2 = max(hl.start[0], hl.end[0])
                if x2 >= min_x and x1 <= max_x:
                    h_ys.append(hl.start[1])

            if len(h_ys) >= 2:
                center_y = _mid(min(h_ys), max(h_ys))
            else:
                center_y = self._median_bar_y(reinforcement, min_x, max_x)
                logger.debug(f"Span [{min_x:.1f}, {max_x:.1f}] has {len(h_ys)} horizontal "
                             f"lines; centerline from bar labels = {center_y:.1f}")

            spans.append(Span(min_x, max_x, center_y, source="lines"))

        return spans

    def _median_bar_y(self, reinforcement: List[TextLabel], min_x: float, max_x: float) -> float:
        ys = sorted(
            c[1] for c in (t.center for t in reinforcement)
            if min_x - self.x_tol <= c[0] <= max_x + self.x_tol
        )
        return ys[len(ys) // 2] if ys else 0.0

    def resolve(self, collected: CollectedPrimitives) -> List[Span]:
        """
        Candidate spans for a multi-beam drawing, left to right.
        Polygon spans win; line spans are only built without polygons.
        """
        spans = self.polygon_spans(collected.boundary_polygons)
        if not spans and collected.boundary_lines:
            spans = self.line_spans(collected.boundary_lines, collected.reinforcement_labels)

        spans.sort(key=lambda s: s.min_x)
        logger.info(f"Resolved {len(spans)} spans "
                    f"({'polygons' if collected.boundary_polygons else 'lines'})")
        return spans

    def span_for_label(
        self,
        label: TextLabel,
        spans: List[Span],
        boundary_lines: List[Line]
    ) -> Span:
        """
        Pick the span a beam ID label belongs to.

        Containing polygon span, then containing line span, then nearest
        polygon span, then the extent of all box lines, then a padded span
        around the label itself.
        """
        x, y = label.center

        polygon_spans = [s for s in spans if s.source == "polygon"]
        for sp in polygon_spans:
            if sp.contains_x(x, self.x_tol):
                return sp

        for sp in spans:
            if sp.source == "lines" and sp.contains_x(x, self.x_tol):
                return sp

        if polygon_spans:
            nearest = min(polygon_spans, key=lambda s: abs(s.mid_x - x))
            logger.warning(f"Beam ID '{label.text}' lies outside every box; "
                           f"using nearest span [{nearest.min_x:.1f}, {nearest.max_x:.1f}]")
            return Span(nearest.min_x, nearest.max_x, nearest.center_y,
                        polygon=nearest.polygon, source="nearest")

        if boundary_lines:
            span = self.extent_span(boundary_lines, center="mid")
            logger.warning(f"Beam ID '{label.text}' not inside an inferred span; "
                           f"using extent of all box lines")
            return span

        return self.fallback_span((x, y))

    # ------------------------------------------------------------------
    # Shared fallbacks
    # ------------------------------------------------------------------

    def extent_span(self, lines: List[Line], center: str = "mid") -> Span:
        """
        Span covering every line endpoint.

        center="mid" puts the centerline halfway between the lowest and
        highest endpoint; center="mean" averages all endpoint Ys.
        """
        coords = np.array([[l.start[0], l.start[1], l.end[0], l.end[1]] for l in lines],
                          dtype=float)
        xs = np.concatenate([coords[:, 0], coords[:, 2]])
        ys = np.concatenate([coords[:, 1], coords[:, 3]])

        if center == "mean":
            center_y = float(ys.mean())
        else:
            center_y = _mid(float(ys.min()), float(ys.max()))

        return Span(float(xs.min()), float(xs.max()), center_y, source="extent")

    def fallback_span(self, point: Point) -> Span:
        """Degenerate span padded around a single point."""
        pad = self.config.fallback_padding
        logger.warning(f"No box geometry; using +/-{pad:g} span around ({point[0]:.1f}, {point[1]:.1f})")
        return Span(point[0] - pad, point[0] + pad, point[1], source="fallback")

    # ------------------------------------------------------------------
    # Single-beam
    # ------------------------------------------------------------------

    def resolve_single(
        self,
        collected: CollectedPrimitives,
        id_label: Optional[TextLabel] = None
    ) -> Span:
        """
        Span for a single-beam diagram: extent of box and steel lines with the
        centerline at the mean endpoint height.
        """
        lines = collected.boundary_lines + collected.auxiliary_lines
        if lines:
            span = self.extent_span(lines, center="mean")
            logger.info(f"Single-beam span [{span.min_x:.1f}, {span.max_x:.1f}], "
                        f"centerline y={span.center_y:.1f}")
            return span

        if id_label is not None:
            return self.fallback_span(id_label.center)

        logger.warning("No box lines and no beam ID; span is degenerate at origin")
        return Span(0.0, 0.0, 0.0, source="fallback")
