"""
Beam Table Export Module
Writes finished beam records to:
- CSV (one header row, one row per beam)
- JSON (records with span traceability)
- Excel (styled table with grouped headers)
- Debug overlay PNG (spans and zones over the drawing)
"""

import logging
import json
import csv
from pathlib import Path
from typing import List, Dict, Optional

from openpyxl import Workbook
from openpyxl.styles import Font, Alignment, Border, Side, PatternFill
from openpyxl.utils import get_column_letter

from .config import ExportConfig
from .primitives import Primitive
from .records import BeamRecord, Column, BEAM_TABLE_COLUMNS, column_groups
from .spans import Span

logger = logging.getLogger(__name__)

HEADER_FILL = "DCE6F1"  # RGB(220, 230, 241)
EXPORT_FORMATS = ("csv", "json", "xlsx")


class BeamTableExporter:
    """
    Exports beam table records.
    """

    def __init__(self, config: ExportConfig = None, columns: List[Column] = None):
        """Initialize exporter."""
        self.config = config or ExportConfig()
        self.columns = columns or BEAM_TABLE_COLUMNS
        self.output_dir = Path(self.config.output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def export_all(
        self,
        drawing_id: str,
        records: List[BeamRecord],
        primitives: Optional[List[Primitive]] = None,
        spans: Optional[List[Span]] = None
    ) -> Dict[str, Path]:
        """
        Export records in every configured format.

        Returns:
            Dictionary of output file paths
        """
        paths = {}

        drawing_dir = self.output_dir / drawing_id
        drawing_dir.mkdir(parents=True, exist_ok=True)

        for fmt in self.config.formats:
            if fmt == "csv":
                paths['csv'] = self.export_csv(drawing_dir / "beam_table.csv", records)
            elif fmt == "json":
                paths['json'] = self.export_json(drawing_dir / "beam_table.json", drawing_id, records)
            elif fmt == "xlsx":
                paths['xlsx'] = self.export_xlsx(drawing_dir / "beam_table.xlsx", records)
            else:
                logger.warning(f"Unknown export format '{fmt}', skipping")

        if self.config.overlay and primitives:
            from .overlay import render_overlay
            paths['overlay'] = render_overlay(
                drawing_dir / "overlay_spans.png",
                primitives,
                spans or [r.span for r in records if r.span is not None],
                max_dimension=self.config.overlay_max_dimension,
                reinforcement_layer=self.config.reinforcement_layer
            )

        logger.info(f"Exported {len(paths)} files to {drawing_dir}")
        return paths

    def export_csv(self, output_path: Path, records: List[BeamRecord]) -> Path:
        """Export the beam table as CSV."""
        with open(output_path, 'w', newline='') as f:
            writer = csv.writer(f)
            writer.writerow([col.header for col in self.columns])
            for record in records:
                row = record.to_row(self.columns)
                writer.writerow([row[col.name] for col in self.columns])

        logger.info(f"Exported CSV: {output_path}")
        return output_path

    def export_json(self, output_path: Path, drawing_id: str, records: List[BeamRecord]) -> Path:
        """Export formatted rows plus raw record values."""
        data = {
            'drawing_id': drawing_id,
            'version': '1.0',
            'columns': [
                {'name': col.name, 'header': col.header, 'group': col.group, 'unit': col.unit}
                for col in self.columns
            ],
            'rows': [record.to_row(self.columns) for record in records],
            'records': [record.to_dict() for record in records]
        }

        with open(output_path, 'w') as f:
            json.dump(data, f, indent=2)

        logger.info(f"Exported JSON: {output_path}")
        return output_path

    def export_xlsx(self, output_path: Path, records: List[BeamRecord]) -> Path:
        """
        Export a styled beam table.

        Row 1 holds merged group headers, row 2 the column headers, then one
        row per beam.
        """
        wb = Workbook()
        ws = wb.active
        ws.title = "Beam Table"

        # Styles
        group_font = Font(bold=True, size=12)
        header_font = Font(bold=True, size=10)
        header_fill = PatternFill(start_color=HEADER_FILL, end_color=HEADER_FILL, fill_type="solid")
        centered = Alignment(horizontal='center', vertical='center', wrap_text=True)
        thin_border = Border(
            left=Side(style='thin'),
            right=Side(style='thin'),
            top=Side(style='thin'),
            bottom=Side(style='thin')
        )

        # Group headers
        for group in column_groups(self.columns):
            start_col = group['start'] + 1
            end_col = group['end'] + 1
            cell = ws.cell(row=1, column=start_col, value=group['group'])
            cell.font = group_font
            if end_col > start_col:
                ws.merge_cells(start_row=1, start_column=start_col, end_row=1, end_column=end_col)

        # Column headers and widths
        for col_idx, col in enumerate(self.columns, 1):
            ws.cell(row=2, column=col_idx, value=col.header).font = header_font
            ws.column_dimensions[get_column_letter(col_idx)].width = col.width

        # Data rows
        for row_idx, record in enumerate(records, 3):
            row = record.to_row(self.columns)
            for col_idx, col in enumerate(self.columns, 1):
                ws.cell(row=row_idx, column=col_idx, value=row[col.name])

        last_row = max(2, len(records) + 2)
        for row_cells in ws.iter_rows(min_row=1, max_row=last_row, max_col=len(self.columns)):
            for cell in row_cells:
                cell.alignment = centered
                cell.border = thin_border
                if cell.row <= 2:
                    cell.fill = header_fill

        wb.save(output_path)
        logger.info(f"Exported Excel table: {output_path}")
        return output_path


def export_records(
    output_dir: Path,
    drawing_id: str,
    records: List[BeamRecord],
    formats: List[str] = None
) -> Dict[str, Path]:
    """Convenience function to export records."""
    config = ExportConfig(output_dir=Path(output_dir), formats=formats or list(EXPORT_FORMATS))
    exporter = BeamTableExporter(config)
    return exporter.export_all(drawing_id, records)
