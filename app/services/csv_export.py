"""
CSV export for normalized catalog records.
"""

from typing import Any, Dict, List
from pydantic import BaseModel


def _stringify(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def to_csv(records: List[Any]) -> str:
    """
    Render records as comma-separated text.

    The header comes from the first record's keys. Values containing a comma
    are wrapped in double quotes; embedded quotes are not escaped. An empty
    list renders as an empty string.
    """
    if not records:
        return ""

    rows: List[Dict[str, Any]] = [
        record.model_dump() if isinstance(record, BaseModel) else dict(record)
        for record in records
    ]
    headers = list(rows[0].keys())

    lines = [",".join(headers)]
    for row in rows:
        values = []
        for header in headers:
            text = _stringify(row.get(header))
            values.append(f'"{text}"' if "," in text else text)
        lines.append(",".join(values))
    return "\n".join(lines)
