"""
Beam Table Pipeline
Main orchestration for turning a drawing's primitives into beam records.

Supports two modes:
1. MULTI: many beam IDs along a continuous elevation, with spans from B_BOX
   outlines and top bars shared across supports
2. SINGLE: one beam diagram, one record
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Dict, Iterable

from .beam_id import parse_beam_id
from .boundary import BoundaryMerger, merge_bars
from .collector import collect
from .config import PipelineConfig, load_config, load_export_config
from .primitives import Primitive
from .records import BeamRecord
from .spans import SpanResolver, Span
from .zones import ZoneClassifier, ZoneAssignment, Face, Zone

logger = logging.getLogger(__name__)

MODES = ("multi", "single")


@dataclass
class BeamTableResult:
    """Result of a pipeline run."""
    success: bool = False
    mode: str = "multi"
    drawing_id: str = ""

    records: List[BeamRecord] = field(default_factory=list)
    spans: List[Span] = field(default_factory=list)

    # Output paths
    output_paths: Dict[str, Path] = field(default_factory=dict)

    # User-facing messages, warnings and failures
    notices: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)


class BeamTablePipeline:
    """
    Main pipeline for beam table extraction.
    """

    def __init__(self, config: PipelineConfig = None):
        """Initialize pipeline."""
        self.config = config or PipelineConfig()

        # Initialize components
        self.span_resolver = SpanResolver(self.config)
        self.classifier = ZoneClassifier(self.config)
        self.merger = BoundaryMerger(self.config)

    def run(self, primitives: Iterable[Primitive], mode: str = "multi") -> BeamTableResult:
        """Dispatch to the multi- or single-beam workflow."""
        if mode == "single":
            return self.process_single(primitives)
        if mode == "multi":
            return self.process_multi(primitives)
        raise ValueError(f"Unknown mode '{mode}', expected one of {MODES}")

    def process_multi(self, primitives: Iterable[Primitive]) -> BeamTableResult:
        """
        Extract one record per beam ID label.

        Args:
            primitives: Drawing snapshot

        Returns:
            BeamTableResult with records ordered left to right
        """
        result = BeamTableResult(mode="multi")
        collected = collect(primitives, self.config.layers)

        if not collected.id_labels:
            notice = f"No Beam IDs found on layer '{self.config.layers.beam_id}'."
            logger.warning(notice)
            result.notices.append(notice)
            return result

        candidates = self.span_resolver.resolve(collected)
        if not candidates:
            result.warnings.append("No spans from box geometry; using fallback spans")

        # Map each ID label to a span
        beams = []
        for id_label in collected.id_labels:
            beam_id = parse_beam_id(id_label.text)
            span = self.span_resolver.span_for_label(
                id_label, candidates, collected.boundary_lines
            )
            if span.source in ("nearest", "extent", "fallback"):
                result.warnings.append(
                    f"Beam '{beam_id.mark}' mapped to {span.source} span "
                    f"[{span.min_x:.1f}, {span.max_x:.1f}]"
                )
            beams.append((beam_id, span))

        # Left-to-right for shared-bar logic
        beams.sort(key=lambda b: b[1].min_x)
        self._warn_shared_spans(beams, result)

        spans = [span for _, span in beams]
        assignments = []
        for beam_id, span in beams:
            if not span.is_valid:
                logger.warning(f"Skipping classification for '{beam_id.mark}': empty span")
                result.warnings.append(f"Beam '{beam_id.mark}' has an empty span")
                assignments.append(ZoneAssignment())
                continue
            assignments.append(self.classifier.classify(
                span,
                collected.reinforcement_labels,
                collected.stirrup_labels,
                collected.dimension_marks,
                clip_to_span=True
            ))

        shared = self.merger.merge(spans, collected.reinforcement_labels)

        for idx, ((beam_id, span), assignment) in enumerate(zip(beams, assignments)):
            extras = shared.get(idx, {})
            left_top = assignment.bar_text(Face.TOP, Zone.LEFT)
            right_top = assignment.bar_text(Face.TOP, Zone.RIGHT)
            if extras.get("left_top"):
                left_top = merge_bars(left_top, extras["left_top"])
            if extras.get("right_top"):
                right_top = merge_bars(right_top, extras["right_top"])

            result.records.append(BeamRecord.build(
                mark=beam_id.mark,
                width=beam_id.width,
                depth=beam_id.depth,
                level=collected.level,
                span=span,
                assignment=assignment,
                left_top=left_top,
                right_top=right_top,
                shear_legs=self.config.shear_legs
            ))

        result.spans = spans
        result.success = True
        logger.info(f"Multi-beam table with {len(result.records)} segments built")
        return result

    def process_single(self, primitives: Iterable[Primitive]) -> BeamTableResult:
        """
        Extract exactly one record from a single beam diagram.
        The last B_NO label gives the mark and size.
        """
        result = BeamTableResult(mode="single")
        collected = collect(primitives, self.config.layers)

        id_label = collected.id_labels[-1] if collected.id_labels else None
        if id_label is None:
            result.warnings.append(
                f"No beam ID on layer '{self.config.layers.beam_id}'; mark left blank"
            )
        elif len(collected.id_labels) > 1:
            result.warnings.append(
                f"{len(collected.id_labels)} beam IDs in a single-beam diagram; using the last"
            )
        beam_id = parse_beam_id(id_label.text if id_label else "")

        span = self.span_resolver.resolve_single(collected, id_label)
        assignment = self.classifier.classify(
            span,
            collected.reinforcement_labels,
            collected.stirrup_labels,
            collected.dimension_marks,
            clip_to_span=False
        )

        result.records.append(BeamRecord.build(
            mark=beam_id.mark,
            width=beam_id.width,
            depth=beam_id.depth,
            level=collected.level,
            span=span,
            assignment=assignment,
            shear_legs=self.config.shear_legs
        ))
        result.spans = [span]
        result.success = True
        logger.info(f"Single-beam table built for '{beam_id.mark}'")
        return result

    def _warn_shared_spans(self, beams, result: BeamTableResult) -> None:
        seen: Dict[tuple, str] = {}
        for beam_id, span in beams:
            key = (span.min_x, span.max_x, span.center_y)
            if key in seen:
                result.warnings.append(
                    f"Beams '{seen[key]}' and '{beam_id.mark}' share span "
                    f"[{span.min_x:.1f}, {span.max_x:.1f}]"
                )
            else:
                seen[key] = beam_id.mark


def process_drawing(
    input_path: Path,
    mode: str = "multi",
    output_dir: Path = None,
    formats: List[str] = None,
    overlay: bool = False,
    config_path: Path = None
) -> BeamTableResult:
    """
    Convenience function: read a DXF drawing, extract beam records and export
    them.

    Args:
        input_path: DXF file
        mode: "multi" or "single"
        output_dir: Output directory (nothing is written when None)
        formats: Export formats ("csv", "json", "xlsx"); rules file when None
        overlay: Also write a debug overlay PNG
        config_path: Rules YAML overriding the bundled defaults

    Returns:
        BeamTableResult
    """
    from .dxf_reader import read_primitives
    from .export import BeamTableExporter

    input_path = Path(input_path)
    result = BeamTableResult(mode=mode, drawing_id=input_path.stem)

    logger.info(f"Starting beam table extraction for: {input_path}")

    try:
        config = load_config(config_path)
        primitives = read_primitives(input_path)
        result = BeamTablePipeline(config).run(primitives, mode=mode)
        result.drawing_id = input_path.stem

        if result.success and output_dir is not None:
            export_config = load_export_config(config_path, output_dir)
            export_config.reinforcement_layer = config.layers.reinforcement
            if formats:
                export_config.formats = list(formats)
            if overlay:
                export_config.overlay = True

            exporter = BeamTableExporter(export_config)
            result.output_paths = exporter.export_all(
                result.drawing_id, result.records,
                primitives=primitives if export_config.overlay else None,
                spans=result.spans
            )

    except Exception as e:
        logger.error(f"Pipeline error: {e}")
        result.success = False
        result.errors.append(str(e))

    return result
