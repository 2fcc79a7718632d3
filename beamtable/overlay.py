"""
Debug Overlay
Draws resolved spans, zone thresholds and label positions so the
classification can be checked against the drawing by eye.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple

import numpy as np
import cv2

from .primitives import Primitive, TextLabel, Line, Polygon, DimensionMark, Bounds
from .spans import Span
from .zones import ZoneThresholds

logger = logging.getLogger(__name__)


# Colors (BGR)
COLORS = {
    "geometry": (160, 160, 160),  # Grey
    "span": (0, 0, 255),          # Red
    "centerline": (255, 0, 255),  # Magenta
    "threshold": (0, 165, 255),   # Orange
    "bar": (0, 128, 0),           # Green
    "other_text": (255, 0, 0),    # Blue
    "dimension": (255, 255, 0),   # Cyan
}


@dataclass
class CanvasTransform:
    """Maps drawing coordinates (Y up) onto image pixels (Y down)."""
    origin_x: float
    origin_y: float
    scale: float
    height: int
    margin: int

    def to_px(self, x: float, y: float) -> Tuple[int, int]:
        px = int(round((x - self.origin_x) * self.scale)) + self.margin
        py = self.height - self.margin - int(round((y - self.origin_y) * self.scale))
        return (px, py)


def _primitive_bounds(prim: Primitive):
    if isinstance(prim, DimensionMark):
        x, y = prim.text_position
        return Bounds(x, y, x, y)
    return prim.bounds


def _world_extents(primitives: List[Primitive], spans: List[Span]) -> Bounds:
    boxes = [b for b in (_primitive_bounds(p) for p in primitives) if b is not None]
    xs = [b.min_x for b in boxes] + [b.max_x for b in boxes]
    ys = [b.min_y for b in boxes] + [b.max_y for b in boxes]
    for sp in spans:
        xs += [sp.min_x, sp.max_x]
        ys.append(sp.center_y)
    if not xs:
        return Bounds(0.0, 0.0, 1.0, 1.0)
    return Bounds(min(xs), min(ys), max(xs), max(ys))


def render_overlay(
    output_path: Path,
    primitives: List[Primitive],
    spans: List[Span],
    max_dimension: int = 2000,
    margin: int = 40,
    reinforcement_layer: str = "B_TEXT"
) -> Path:
    """
    Render primitives and spans to a PNG.

    Args:
        output_path: Where to write the image
        primitives: Drawing snapshot
        spans: Spans to highlight
        max_dimension: Longest image side in pixels
        reinforcement_layer: Labels on this layer are drawn as bars

    Returns:
        output_path
    """
    world = _world_extents(primitives, spans)
    world_w = max(world.max_x - world.min_x, 1e-6)
    world_h = max(world.max_y - world.min_y, 1e-6)
    scale = (max_dimension - 2 * margin) / max(world_w, world_h)

    width = int(world_w * scale) + 2 * margin
    height = int(world_h * scale) + 2 * margin
    image = np.full((height, width, 3), 255, dtype=np.uint8)
    tf = CanvasTransform(world.min_x, world.min_y, scale, height, margin)

    # Geometry
    for prim in primitives:
        if isinstance(prim, Line):
            cv2.line(image, tf.to_px(*prim.start), tf.to_px(*prim.end), COLORS["geometry"], 1)
        elif isinstance(prim, Polygon) and prim.vertices:
            pts = np.array([tf.to_px(x, y) for x, y in prim.vertices], dtype=np.int32)
            cv2.polylines(image, [pts], True, COLORS["geometry"], 1)

    # Spans and zones
    for sp in spans:
        thresholds = ZoneThresholds.for_span(sp)
        left = tf.to_px(sp.min_x, sp.center_y)
        right = tf.to_px(sp.max_x, sp.center_y)
        cv2.line(image, left, right, COLORS["centerline"], 2)
        for x, color in ((sp.min_x, "span"), (sp.max_x, "span"),
                         (thresholds.left_max_x, "threshold"),
                         (thresholds.right_min_x, "threshold")):
            top = (tf.to_px(x, 0)[0], margin // 2)
            bottom = (tf.to_px(x, 0)[0], height - margin // 2)
            cv2.line(image, top, bottom, COLORS[color], 1)

    # Annotations
    for prim in primitives:
        if isinstance(prim, TextLabel):
            pt = tf.to_px(*prim.center)
            color = COLORS["bar"] if prim.layer == reinforcement_layer else COLORS["other_text"]
            cv2.circle(image, pt, 3, color, -1)
            cv2.putText(image, prim.text[:24], (pt[0] + 4, pt[1] - 4),
                        cv2.FONT_HERSHEY_SIMPLEX, 0.4, color, 1)
        elif isinstance(prim, DimensionMark):
            pt = tf.to_px(*prim.text_position)
            cv2.drawMarker(image, pt, COLORS["dimension"], cv2.MARKER_CROSS, 8, 1)

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    cv2.imwrite(str(output_path), image)
    logger.info(f"Exported overlay: {output_path}")
    return output_path
