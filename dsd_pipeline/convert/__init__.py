"""
DSD conversion entry points.

Usage:
    python -m dsd_pipeline.convert report.dsd
    python -m dsd_pipeline.convert report.dsd --config configs/default.yaml --output report.json
"""

from .runner import (
    ConversionResult,
    DocumentConverter,
    convert_document,
    convert_file,
    print_conversion_summary,
)

__all__ = [
    "ConversionResult",
    "DocumentConverter",
    "convert_document",
    "convert_file",
    "print_conversion_summary",
]
