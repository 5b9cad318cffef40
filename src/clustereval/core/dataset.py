"""Validation dataset loading.

Expected JSON Lines row shape:
{
  "record_id": 123,
  "predicted_cluster": 4,
  "true_label": "rag"
}

``record_id`` and ``true_label`` are optional. Ids must be integers or
strings of digits; floats are rejected rather than truncated.
"""

from __future__ import annotations

import json
import re
from pathlib import Path

from clustereval.core.exceptions import DatasetFormatError
from clustereval.schemas import ValidationRecord
from clustereval.utils import get_logger, read_jsonl_lines

logger = get_logger(__name__)

_INTEGER_RE = re.compile(r"^[+-]?\d+$")


def _parse_int(value: object, field: str, index: int) -> int:
    """Parse an integer id field of a row."""
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str) and _INTEGER_RE.match(value.strip()):
        return int(value.strip())
    raise DatasetFormatError(
        f"Row {index} has a non-integer {field}: {value!r}",
        {"row": index, "field": field},
    )


def record_from_row(row: dict, index: int = 0) -> ValidationRecord:
    """Convert one dataset row into a ValidationRecord."""
    if not isinstance(row, dict):
        raise DatasetFormatError(
            f"Row {index} is not a JSON object: {type(row).__name__}",
            {"row": index},
        )

    cluster_id = row.get("predicted_cluster")
    if cluster_id is None:
        raise DatasetFormatError(
            f"Row {index} has no predicted_cluster",
            {"row": index, "keys": sorted(row)},
        )

    record_id = row.get("record_id")
    return ValidationRecord(
        predicted_cluster=_parse_int(cluster_id, "predicted_cluster", index),
        true_label=row.get("true_label"),
        record_id=_parse_int(record_id, "record_id", index) if record_id is not None else None,
    )


def load_validation_records(path: str | Path) -> list[ValidationRecord]:
    """Load validation records from a JSON Lines file.

    A missing file yields an empty list. Row indices in errors count
    non-blank lines from 0.
    """
    records: list[ValidationRecord] = []
    for index, line in enumerate(read_jsonl_lines(path)):
        try:
            row = json.loads(line)
        except json.JSONDecodeError as e:
            raise DatasetFormatError(
                f"Row {index} is not valid JSON: {e.msg}",
                {"row": index, "path": str(path)},
            ) from e
        records.append(record_from_row(row, index))

    logger.info(f"Loaded {len(records)} validation records from {path}")
    return records
