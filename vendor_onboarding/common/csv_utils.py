"""
CSV Utilities

Parsing of uploaded spreadsheet text with proper quoting support.
"""

import csv
import io
from typing import List, Tuple


def configure_csv(field_size_limit: int = 10 * 1024 * 1024) -> None:
    """
    Configure CSV module for large fields.

    Args:
        field_size_limit: Maximum field size in bytes (default: 10MB)
    """
    csv.field_size_limit(field_size_limit)


def parse_csv_text(text: str) -> Tuple[List[str], List[List[str]]]:
    """
    Parse comma-delimited text into a header row and data rows.

    Quoted fields may contain commas, escaped quotes and newlines.
    Cells are stripped of surrounding whitespace.

    Args:
        text: Raw CSV content

    Returns:
        (headers, rows); both empty for blank input
    """
    if not text or not text.strip():
        return [], []

    # utf-8-sig exports leave a BOM on the first header
    text = text.lstrip('\ufeff')

    reader = csv.reader(io.StringIO(text))
    rows = [[cell.strip() for cell in row] for row in reader]
    if not rows:
        return [], []

    return rows[0], rows[1:]


# Initialize CSV configuration on module import
configure_csv()
