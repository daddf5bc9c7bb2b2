"""
Catalog file reader.
Parses an uploaded .xlsx or .csv product master into raw import rows.
"""

import logging
from io import BytesIO, StringIO
from typing import List

import pandas as pd

from app.schemas.catalog_import import ImportRow

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = (".xlsx", ".csv")


def is_supported_file(filename: str) -> bool:
    return filename.lower().endswith(SUPPORTED_EXTENSIONS)


def _decode(content: bytes) -> str:
    # Try to decode with UTF-8, fallback to latin-1
    try:
        return content.decode("utf-8-sig")
    except UnicodeDecodeError:
        return content.decode("latin-1")


def read_catalog_file(filename: str, content: bytes) -> List[ImportRow]:
    """
    Parse the first sheet of a workbook (or a CSV file) into row dicts.

    Every cell is read as text so barcodes keep their leading zeros and
    pack counts are validated as typed. Empty cells become "" and rows with
    no content at all are skipped.

    Raises:
        ValueError: If the file extension is not supported.
        Exception: Whatever pandas/openpyxl raise for a malformed file.
    """
    name = filename.lower()
    if name.endswith(".csv"):
        df = pd.read_csv(StringIO(_decode(content)), dtype=str, keep_default_na=False)
    elif name.endswith(".xlsx"):
        df = pd.read_excel(BytesIO(content), sheet_name=0, dtype=str, keep_default_na=False, engine="openpyxl")
    else:
        raise ValueError(f"Unsupported file type: {filename}")

    df = df.fillna("")
    df.columns = [str(col) for col in df.columns]

    # Skip fully blank rows (trailing formatting in spreadsheets)
    if len(df):
        non_empty = df.apply(lambda row: any(str(value).strip() for value in row), axis=1)
        df = df[non_empty]

    rows = df.to_dict(orient="records")
    logger.info(f"Parsed {len(rows)} rows from {filename}")
    return rows
