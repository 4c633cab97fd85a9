"""
Tabular (CSV) Source

Flattens an uploaded spreadsheet into one text document for the
extraction prompt:

    CSV DATA:
    Headers: Name, SKU, Color

    Row 1:
    Name: Linen Shirt
    SKU: LS-1-W
    Color: White
"""

import logging
from typing import List, Sequence

from ..common.csv_utils import parse_csv_text
from ..exceptions import InputValidationError
from .uploads import validate_upload_size

logger = logging.getLogger(__name__)


def validate_csv_upload(filename: str, size: int) -> None:
    """
    Check an uploaded spreadsheet before reading it.

    Raises:
        InputValidationError: Missing file, wrong extension, empty or >10MB
    """
    if not filename:
        raise InputValidationError("No file provided", field="file")
    if not filename.lower().endswith(".csv"):
        raise InputValidationError("Please upload a CSV file", field="file")
    validate_upload_size(size, "CSV file")


def flatten_rows(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> str:
    """
    Render rows as "header: value" blocks.

    Blank rows are skipped; row numbers keep their position in the file
    (the first data row is Row 1). Missing trailing cells render empty.
    """
    lines: List[str] = ["CSV DATA:", f"Headers: {', '.join(headers)}", ""]

    for number, row in enumerate(rows, start=1):
        if not any(cell.strip() for cell in row):
            continue
        lines.append(f"Row {number}:")
        for index, header in enumerate(headers):
            lines.append(f"{header}: {row[index] if index < len(row) else ''}")
        lines.append("")

    return "\n".join(lines) + "\n"


def csv_to_text(content: str) -> str:
    """
    Parse CSV content and flatten it for the extraction prompt.

    Raises:
        InputValidationError: If the content is blank or has no header row
    """
    headers, rows = parse_csv_text(content)
    if not headers:
        raise InputValidationError("CSV file is empty", field="file")

    logger.info("Parsed CSV: %d columns, %d rows", len(headers), len(rows))
    return flatten_rows(headers, rows)
