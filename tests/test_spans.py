import pytest

from beamtable.collector import collect
from beamtable.spans import SpanResolver, Span, unique_xs
from beamtable.primitives import TextLabel

from conftest import box, beam_no, bar, box_line


@pytest.fixture
def resolver(config):
    return SpanResolver(config)


def test_unique_xs_merges_and_sorts():
    assert unique_xs([3000.0, 0.0, 3000.0001, 6000.0]) == pytest.approx([0.0, 3000.00005, 6000.0])


def test_polygon_spans(resolver):
    collected = collect([box(3000, 6000, 0, 600), box(0, 3000, -100, 500)])
    spans = resolver.resolve(collected)

    assert [(s.min_x, s.max_x) for s in spans] == [(0, 3000), (3000, 6000)]
    assert spans[0].center_y == 200
    assert spans[1].center_y == 300
    assert all(s.source == "polygon" and s.polygon is not None for s in spans)


def test_polygons_take_priority_over_lines(resolver):
    collected = collect([
        box(0, 9000),
        box_line(0, -300, 0, 300),
        box_line(4000, -300, 4000, 300),
    ])
    spans = resolver.resolve(collected)
    assert len(spans) == 1
    assert (spans[0].min_x, spans[0].max_x) == (0, 9000)


def test_line_spans_between_vertical_lines(resolver):
    collected = collect([
        box_line(0, -300, 0, 300),
        box_line(3000, -300, 3000, 300),
        box_line(7000, -300, 7000, 300),
        box_line(0, 300, 7000, 300),
        box_line(0, -300, 7000, -300),
    ])
    spans = resolver.resolve(collected)

    assert [(s.min_x, s.max_x) for s in spans] == [(0, 3000), (3000, 7000)]
    assert all(s.center_y == 0 for s in spans)
    assert all(s.source == "lines" for s in spans)


def test_line_spans_skip_narrow_pairs(resolver):
    # 0.005 apart is below 10 * XTol; rounding keeps them as distinct positions
    collected = collect([
        box_line(0, -300, 0, 300),
        box_line(0.005, -300, 0.005, 300),
        box_line(5000, -300, 5000, 300),
    ])
    spans = resolver.resolve(collected)
    assert [(s.min_x, s.max_x) for s in spans] == [(0.005, 5000)]


def test_line_span_centerline_from_bar_median(resolver):
    collected = collect([
        box_line(0, -300, 0, 300),
        box_line(5000, -300, 5000, 300),
        box_line(0, 300, 5000, 300),
        bar("2T16(T)", 1000, -250),
        bar("2T12(T)", 2000, 100),
        bar("2T12(T)", 3000, 250),
        bar("far away", 9000, 9999),
    ])
    span = resolver.resolve(collected)[0]
    # sorted [-250, 100, 250] -> element at index 1
    assert span.center_y == 100


def test_line_span_centerline_zero_without_bars(resolver):
    collected = collect([box_line(0, -300, 0, 300), box_line(5000, -300, 5000, 300)])
    assert resolver.resolve(collected)[0].center_y == 0.0


def test_single_vertical_line_gives_no_spans(resolver):
    collected = collect([box_line(0, -300, 0, 300), box_line(0, 300, 5000, 300)])
    assert resolver.resolve(collected) == []


def test_label_maps_to_containing_span(resolver):
    collected = collect([box(0, 3000), box(3000, 6000)])
    spans = resolver.resolve(collected)
    span = resolver.span_for_label(beam_no("B2", 4500), spans, [])
    assert (span.min_x, span.max_x) == (3000, 6000)


def test_label_outside_polygons_maps_to_nearest(resolver):
    collected = collect([box(0, 3000), box(3000, 6000)])
    spans = resolver.resolve(collected)
    span = resolver.span_for_label(beam_no("B3", 7000), spans, [])
    assert (span.min_x, span.max_x) == (3000, 6000)
    assert span.source == "nearest"


def test_label_without_spans_uses_line_extent(resolver):
    lines = [box_line(100, -200, 100, 400), box_line(100, 400, 2500, 400)]
    span = resolver.span_for_label(beam_no("B1", 5000), [], lines)
    assert (span.min_x, span.max_x) == (100, 2500)
    assert span.center_y == 100
    assert span.source == "extent"


def test_no_geometry_fallback_span(resolver):
    label = beam_no("B1 300x600", 100, y=250)
    span = resolver.span_for_label(label, [], [])
    assert (span.min_x, span.max_x) == (-900, 1100)
    assert span.center_y == 250
    assert span.source == "fallback"


def test_label_without_bounds_sits_at_origin(resolver):
    span = resolver.span_for_label(TextLabel("B_NO", "B1"), [], [])
    assert (span.min_x, span.max_x, span.center_y) == (-1000, 1000, 0)


def test_single_beam_span_includes_steel_lines(resolver):
    collected = collect([
        box_line(0, 0, 0, 600),
        box_line(0, 600, 4000, 600),
        box_line(-200, 100, 4200, 100, layer="B_STEEL"),
    ])
    span = resolver.resolve_single(collected)
    assert (span.min_x, span.max_x) == (-200, 4200)
    # mean of endpoint Ys: (0 + 600 + 600 + 600 + 100 + 100) / 6
    assert span.center_y == pytest.approx(2000 / 6)


def test_single_beam_span_without_lines(resolver):
    collected = collect([])
    assert resolver.resolve_single(collected) == Span(0.0, 0.0, 0.0, source="fallback")

    label = beam_no("B1", 100, y=50)
    span = resolver.resolve_single(collected, label)
    assert (span.min_x, span.max_x, span.center_y) == (-900, 1100, 50)


def test_span_validity():
    assert Span(0, 10, 0).is_valid
    assert not Span(10, 10, 0).is_valid
    assert Span(0, 10, 0).contains_x(10.0005, 1e-3)
    assert not Span(0, 10, 0).contains_x(10.01, 1e-3)
