"""
DSD Disclosure Conversion Pipeline.

This package provides tools for converting DSD audit-report filings
into spreadsheet workbooks:
- Reading the DSD container and parsing its markup
- Segmenting the document into structural sections
- Splitting financial statements and footnotes
- Laying out tables onto sheet grids
"""

__version__ = "0.1.0"
