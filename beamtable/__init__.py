"""
Beam Table Extractor
Builds beam reinforcement tables from annotated beam elevation drawings.

Modules:
- primitives: Layer-tagged drawing primitives (labels, lines, polygons, dimensions)
- collector: Partition primitives by layer and kind
- beam_id: Parse beam mark and section size from ID labels
- spans: Resolve beam spans from box geometry
- zones: Left/mid/right zone classification of bars, stirrups, dimensions
- boundary: Share top bars across supports between adjacent spans
- records: Beam records and the 24-column table schema
- pipeline: Multi-beam and single-beam workflows
- dxf_reader: Read primitives from DXF drawings
- export: CSV/JSON/Excel export
- overlay: Debug overlay rendering
"""

__version__ = "1.0.0"

from .primitives import (
    Bounds,
    TextLabel,
    Line,
    Polygon,
    DimensionMark,
    Primitive
)

from .config import (
    LayerNames,
    PipelineConfig,
    ExportConfig,
    load_config
)

from .collector import (
    CollectedPrimitives,
    collect
)

from .beam_id import (
    BeamId,
    parse_beam_id
)

from .spans import (
    Span,
    SpanResolver
)

from .zones import (
    Zone,
    Face,
    ZoneThresholds,
    ZoneAssignment,
    ZoneClassifier
)

from .boundary import (
    BoundaryMerger,
    merge_bars
)

from .records import (
    BeamRecord,
    Column,
    BEAM_TABLE_COLUMNS
)

from .pipeline import (
    BeamTableResult,
    BeamTablePipeline,
    process_drawing
)

__all__ = [
    # Version
    '__version__',

    # Primitives
    'Bounds',
    'TextLabel',
    'Line',
    'Polygon',
    'DimensionMark',
    'Primitive',

    # Configuration
    'LayerNames',
    'PipelineConfig',
    'ExportConfig',
    'load_config',

    # Collection
    'CollectedPrimitives',
    'collect',

    # Beam IDs
    'BeamId',
    'parse_beam_id',

    # Spans
    'Span',
    'SpanResolver',

    # Zones
    'Zone',
    'Face',
    'ZoneThresholds',
    'ZoneAssignment',
    'ZoneClassifier',

    # Boundary sharing
    'BoundaryMerger',
    'merge_bars',

    # Records
    'BeamRecord',
    'Column',
    'BEAM_TABLE_COLUMNS',

    # Pipeline
    'BeamTableResult',
    'BeamTablePipeline',
    'process_drawing'
]
