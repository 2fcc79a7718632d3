"""Shared factories for beam drawing primitives."""

import pytest

from beamtable.config import PipelineConfig
from beamtable.primitives import Line, rectangle, label_at


def box(min_x, max_x, min_y=-300.0, max_y=300.0):
    """B_BOX outline; centerline at the middle of the box height."""
    return rectangle("B_BOX", min_x, min_y, max_x, max_y)


def beam_no(text, x, y=800.0):
    return label_at("B_NO", text, x, y, width=200, height=100)


def bar(text, x, y):
    return label_at("B_TEXT", text, x, y, width=300, height=80)


def stirrup(text, x, y=0.0):
    return label_at("ring text", text, x, y, width=200, height=80)


def box_line(x1, y1, x2, y2, layer="B_BOX"):
    return Line(layer, (x1, y1), (x2, y2))


@pytest.fixture
def config():
    return PipelineConfig()


@pytest.fixture
def two_span_elevation():
    """B1 on [0, 3000], B2 on [3000, 6000], bars on both faces."""
    return [
        box(0, 3000),
        box(3000, 6000),
        beam_no("B1 300x600", 1500),
        beam_no("B2 230 X 450", 4500),
        bar("2T16(T)", 1500, -200),
        bar("2T16(T)", 4500, -200),
        bar("2T12(T)", 1500, 200),
        bar("1T16(C)", 2800, 200),
        bar("3T16(T)", 3000, 200),
        stirrup("8@150", 400),
        stirrup("8@200", 1500),
        stirrup("8@150", 2700),
    ]
