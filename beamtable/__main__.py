"""
Beam Table Extractor - CLI Entry Point

Commands:
    extract   - Extract the beam table from a DXF drawing
    test      - Run the smoke test
"""

import argparse
import logging
import sys
from pathlib import Path

from .export import EXPORT_FORMATS
from .pipeline import process_drawing, MODES


def setup_logging(verbose: bool = False):
    """Setup logging configuration."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )


def cmd_extract(args):
    """Extract beam records from a drawing."""
    input_path = Path(args.input)
    if not input_path.is_file():
        print(f"Input not found: {input_path}")
        return 1

    result = process_drawing(
        input_path,
        mode=args.mode,
        output_dir=Path(args.output),
        formats=args.format,
        overlay=args.overlay,
        config_path=Path(args.config) if args.config else None
    )

    for notice in result.notices:
        print(notice)

    if not result.success:
        for error in result.errors:
            print(f"Error: {error}")
        return 1

    print(f"\n{'='*60}")
    print(f"BEAM TABLE: {result.drawing_id} ({result.mode.upper()})")
    print(f"{'='*60}")
    print(f"{'Beam':<10} {'Size (m)':<12} {'Span':<22} {'Bottom (L/M/R)':<30}")
    print("-" * 76)
    for record in result.records:
        row = record.to_row()
        span = f"[{record.span.min_x:.0f}, {record.span.max_x:.0f}]" if record.span else ""
        bottom = " / ".join(row[c] or "-" for c in ("Left_bottom", "Mid_bottom", "Right_bottom"))
        print(f"{row['BeamId']:<10} {row['Width'] + 'x' + row['Depth']:<12} {span:<22} {bottom:<30}")

    if result.warnings:
        print(f"\nWarnings:")
        for w in result.warnings:
            print(f"  - {w}")

    if result.output_paths:
        print(f"\nOutputs:")
        for name, path in result.output_paths.items():
            print(f"  {name}: {path}")

    return 0


def cmd_test(args):
    """Run the smoke test."""
    from .smoke_test import run_smoke_test

    success = run_smoke_test(verbose=args.verbose)
    return 0 if success else 1


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Beam Table Extractor",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Multi-span elevation to CSV + Excel
  python -m beamtable extract --input level2_beams.dxf --output ./out

  # Single beam diagram, all formats, with debug overlay
  python -m beamtable extract -i B7.dxf --mode single --format csv json xlsx --overlay

  # Smoke test
  python -m beamtable test
        """
    )

    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable verbose logging')

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # Extract command
    extract_parser = subparsers.add_parser('extract', help='Extract beam table from a DXF')
    extract_parser.add_argument('--input', '-i', required=True,
                                help='Input DXF file')
    extract_parser.add_argument('--output', '-o', default='./out',
                                help='Output directory')
    extract_parser.add_argument('--mode', '-m', choices=MODES, default='multi',
                                help='multi (default) or single beam diagram')
    extract_parser.add_argument('--format', '-f', nargs='+', choices=EXPORT_FORMATS,
                                help='Export formats (default: from rules, csv xlsx)')
    extract_parser.add_argument('--overlay', action='store_true',
                                help='Save debug overlay image')
    extract_parser.add_argument('--config', '-c',
                                help='Rules YAML overriding bundled defaults')
    extract_parser.set_defaults(func=cmd_extract)

    # Test command
    test_parser = subparsers.add_parser('test', help='Run smoke test')
    test_parser.set_defaults(func=cmd_test)

    args = parser.parse_args()

    setup_logging(args.verbose)

    if args.command:
        return args.func(args)

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
