"""
Catalog import row validator.

Checks raw spreadsheet rows against the product master template rules and
returns a flat list of issues. Errors block submission, warnings do not.

Rules, applied per row in this order:
  1. Every required column is present and non-blank.
  2. Pack Count (when filled in) is a whole number.
  3. Case barcode, then Unit Barcode: no spaces, at least 8 characters,
     not repeated earlier in the same batch for the same barcode kind.

Row numbers are spreadsheet line numbers: the header occupies line 1, so the
first data row is reported as row 2.
"""

import logging
import re
from typing import List, Optional, Set

from app.schemas.catalog_import import REQUIRED_COLUMNS, ImportRow, ValidationIssue
from app.schemas.settings import StockholdingConfig

logger = logging.getLogger(__name__)

MIN_BARCODE_LENGTH = 8

_PACK_COUNT_PATTERN = re.compile(r"[0-9]+")

BARCODE_COLUMNS = ("Case barcode", "Unit Barcode")


def cell_text(row: ImportRow, column: str) -> str:
    """Return a cell as a string, treating missing and null cells as empty."""
    value = row.get(column)
    if value is None:
        return ""
    return str(value)


def validate_product_import(
    rows: List[ImportRow],
    config: Optional[StockholdingConfig] = None,
) -> List[ValidationIssue]:
    """
    Validate a batch of import rows.

    Args:
        rows: Raw rows keyed by template column name.
        config: Current stockholding policy. The optional Stockholding Weeks
            column is not range-checked here; it is accepted for callers that
            validate and normalize with the same arguments.

    Returns:
        Issues in row order, then rule order within a row.
    """
    issues: List[ValidationIssue] = []
    seen_barcodes = {column: set() for column in BARCODE_COLUMNS}

    for index, row in enumerate(rows):
        row_num = index + 2

        for column in REQUIRED_COLUMNS:
            if cell_text(row, column).strip() == "":
                issues.append(ValidationIssue(
                    row=row_num,
                    field=column,
                    message="Missing required field",
                    type="error",
                ))

        pack_count = cell_text(row, "Pack Count")
        if pack_count and not _PACK_COUNT_PATTERN.fullmatch(pack_count.strip()):
            issues.append(ValidationIssue(
                row=row_num,
                field="Pack Count",
                message="Must be a numeric value",
                type="error",
            ))

        for column in BARCODE_COLUMNS:
            issues.extend(_check_barcode(row, row_num, column, seen_barcodes[column]))

    logger.debug(
        f"Validated {len(rows)} import rows: "
        f"{sum(1 for i in issues if i.type == 'error')} errors, "
        f"{sum(1 for i in issues if i.type == 'warning')} warnings"
    )
    return issues


def _check_barcode(row: ImportRow, row_num: int, column: str, seen: Set[str]) -> List[ValidationIssue]:
    barcode = cell_text(row, column).strip()
    if not barcode:
        # Blank barcodes are reported by the required-field check
        return []

    issues = []
    if " " in barcode:
        issues.append(ValidationIssue(
            row=row_num,
            field=column,
            message="Barcode contains spaces",
            type="error",
        ))
    if len(barcode) < MIN_BARCODE_LENGTH:
        issues.append(ValidationIssue(
            row=row_num,
            field=column,
            message=f"Barcode is shorter than {MIN_BARCODE_LENGTH} characters",
            type="warning",
        ))
    if barcode in seen:
        issues.append(ValidationIssue(
            row=row_num,
            field=column,
            message="Duplicate barcode",
            type="warning",
        ))
    seen.add(barcode)
    return issues


def has_blocking_issues(issues: List[ValidationIssue]) -> bool:
    """True when any issue is an error."""
    return any(issue.type == "error" for issue in issues)
