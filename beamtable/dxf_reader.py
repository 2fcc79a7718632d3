"""
DXF Reader
Loads a drawing with ezdxf and converts modelspace entities into primitives.

Mapping:
- MTEXT / TEXT     -> TextLabel (plain text, bounding box)
- LINE             -> Line
- LWPOLYLINE / POLYLINE -> Polygon
- DIMENSION        -> DimensionMark (measurement, text midpoint)
"""

import logging
from pathlib import Path
from typing import List, Optional, Iterable

import ezdxf
from ezdxf import bbox

from .primitives import Primitive, TextLabel, Line, Polygon, DimensionMark, Bounds

logger = logging.getLogger(__name__)

SUPPORTED_TYPES = "MTEXT TEXT LINE LWPOLYLINE POLYLINE DIMENSION"


class DrawingReadError(Exception):
    """The drawing file could not be opened or parsed."""


def _xy(point) -> tuple:
    return (float(point[0]), float(point[1]))


def _entity_bounds(entity) -> Optional[Bounds]:
    box = bbox.extents([entity])
    if not box.has_data:
        return None
    return Bounds(box.extmin.x, box.extmin.y, box.extmax.x, box.extmax.y)


def _text_label(entity, layer: str) -> TextLabel:
    # Both resolve control codes (%%c, %%u, \P ...) into plain text
    text = entity.plain_text()
    bounds = _entity_bounds(entity)
    if bounds is None:
        x, y = _xy(entity.dxf.insert)
        bounds = Bounds(x, y, x, y)
    return TextLabel(layer, text or "", bounds)


def _polygon(entity, layer: str) -> Polygon:
    if entity.dxftype() == "LWPOLYLINE":
        vertices = tuple((float(x), float(y)) for x, y in entity.get_points("xy"))
    else:
        vertices = tuple(_xy(p) for p in entity.points())
    return Polygon(layer, vertices)


def _dimension(entity, layer: str) -> DimensionMark:
    measurement = entity.get_measurement()
    try:
        measurement = float(measurement)
    except TypeError:
        # Angular dimensions return a vector
        measurement = 0.0

    if entity.dxf.hasattr("text_midpoint"):
        anchor = _xy(entity.dxf.text_midpoint)
    else:
        p2 = _xy(entity.dxf.defpoint2)
        p3 = _xy(entity.dxf.defpoint3)
        anchor = ((p2[0] + p3[0]) / 2.0, (p2[1] + p3[1]) / 2.0)

    return DimensionMark(layer, measurement, anchor)


def entities_to_primitives(entities: Iterable) -> List[Primitive]:
    """Convert ezdxf entities; unsupported entity types are skipped."""
    primitives: List[Primitive] = []

    for entity in entities:
        etype = entity.dxftype()
        layer = str(entity.dxf.layer)

        if etype in ("MTEXT", "TEXT"):
            primitives.append(_text_label(entity, layer))
        elif etype == "LINE":
            primitives.append(Line(layer, _xy(entity.dxf.start), _xy(entity.dxf.end)))
        elif etype in ("LWPOLYLINE", "POLYLINE"):
            primitives.append(_polygon(entity, layer))
        elif etype == "DIMENSION":
            primitives.append(_dimension(entity, layer))

    return primitives


def read_primitives(path: Path) -> List[Primitive]:
    """
    Read all supported modelspace entities from a DXF file.

    Raises:
        DrawingReadError: if the file is missing or is not valid DXF
    """
    path = Path(path)
    try:
        doc = ezdxf.readfile(str(path))
    except IOError as e:
        raise DrawingReadError(f"Cannot open drawing {path}: {e}") from e
    except ezdxf.DXFStructureError as e:
        raise DrawingReadError(f"Invalid or corrupt DXF {path}: {e}") from e

    msp = doc.modelspace()
    primitives = entities_to_primitives(msp.query(SUPPORTED_TYPES))
    logger.info(f"Read {len(primitives)} primitives from {path.name}")
    return primitives
