"""
CLI interface for DSD conversion.

Usage:
    python -m dsd_pipeline.convert report.dsd
    python -m dsd_pipeline.convert report.dsd --output report.json
    python -m dsd_pipeline.convert report.dsd --config configs/default.yaml --max-note-number 40
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from ..config import load_config, save_config, validate_config
from ..errors import DsdError
from .runner import DocumentConverter, print_conversion_summary

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m dsd_pipeline.convert",
        description="Convert a DSD audit report into a workbook model",
    )
    parser.add_argument("input", type=Path, help="Path to the .dsd file")
    parser.add_argument("--config", type=Path, default=None, help="YAML config file")
    parser.add_argument(
        "--output", "-o", type=Path, default=None,
        help="Where to write the workbook JSON (default: <input>.json)",
    )
    parser.add_argument("--max-note-number", type=int, default=None, help="Override notes.max_note_number")
    parser.add_argument(
        "--save-config", type=Path, default=None,
        help="Write the resolved config (after overrides) to this YAML file",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    config = load_config(args.config)
    if args.max_note_number is not None:
        config.notes.max_note_number = args.max_note_number

    for warning in validate_config(config):
        logger.warning(f"Config warning: {warning}")

    if args.save_config:
        saved = save_config(config, args.save_config)
        logger.info(f"Saved resolved config to {saved} (hash: {config.config_hash()})")

    converter = DocumentConverter(config)
    try:
        result = converter.convert_file(args.input, on_progress=lambda message: logger.info(message))
    except DsdError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    output_path = args.output or args.input.with_suffix(".json")
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(
            {"summary": result.summarize(), "workbook": result.workbook.to_dict()},
            f, indent=2, ensure_ascii=False, default=str,
        )

    print_conversion_summary(result)
    print(f"\nWorkbook saved to: {output_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
