from beamtable.collector import collect
from beamtable.config import LayerNames
from beamtable.primitives import TextLabel, Line, Polygon, DimensionMark, label_at

from conftest import box, beam_no, bar, stirrup, box_line


def test_partitions_by_layer_and_kind():
    prims = [
        beam_no("B1 300x600", 100),
        bar("2T16(T)", 100, -100),
        stirrup("8@150", 100),
        DimensionMark("B_DIM", 1200.0, (100, 500)),
        box_line(0, -300, 0, 300),
        box(0, 3000),
        box_line(0, 0, 3000, 0, layer="B_STEEL"),
        label_at("LEVEL", "+3.000", 0, 2000),
    ]
    result = collect(prims)

    assert len(result.id_labels) == 1
    assert len(result.reinforcement_labels) == 1
    assert len(result.stirrup_labels) == 1
    assert len(result.dimension_marks) == 1
    assert len(result.boundary_lines) == 1
    assert len(result.boundary_polygons) == 1
    assert len(result.auxiliary_lines) == 1
    assert result.level == "+3.000"
    assert result.ignored == 0


def test_unrecognized_combinations_are_ignored():
    prims = [
        TextLabel("B_BOX", "not a box"),
        Line("B_TEXT", (0, 0), (1, 1)),
        Polygon("B_STEEL", ((0, 0), (1, 0), (1, 1))),
        DimensionMark("B_TEXT", 100.0, (0, 0)),
        label_at("DEFPOINTS", "x", 0, 0),
    ]
    result = collect(prims)
    assert result.total == 0
    assert result.ignored == 5


def test_last_level_label_wins():
    prims = [label_at("LEVEL", "+3.000", 0, 0), label_at("LEVEL", "+6.000", 0, 0)]
    assert collect(prims).level == "+6.000"


def test_custom_layer_names():
    layers = LayerNames(beam_id="S-BEAM-ID")
    prims = [label_at("S-BEAM-ID", "B1", 0, 0), beam_no("B2", 0)]
    result = collect(prims, layers)
    assert [t.text for t in result.id_labels] == ["B1"]
    assert result.ignored == 1
