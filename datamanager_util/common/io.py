from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Any

import yaml

from datamanager_util.common.errors import DataFileError


def load_yaml(path: str | Path) -> dict[str, Any]:
    with Path(path).open("r", encoding="utf-8") as f:
        return dict(yaml.safe_load(f) or {})


def read_json(path: str | Path) -> Any:
    json_path = Path(path)
    try:
        with json_path.open("r", encoding="utf-8") as f:
            return json.load(f)
    except OSError as exc:
        raise DataFileError(f"Could not read JSON file: {json_path}") from exc
    except json.JSONDecodeError as exc:
        raise DataFileError(f"Invalid JSON in file: {json_path}") from exc


def read_csv_rows(path: str | Path) -> tuple[list[str], list[dict[str | None, Any]]]:
    """Return the header and the rows of a CSV file keyed by header.

    Fields beyond the header width are collected under the ``None`` key.
    """
    csv_path = Path(path)
    try:
        with csv_path.open("r", encoding="utf-8-sig", newline="") as f:
            reader = csv.DictReader(f)
            rows = list(reader)
            header = list(reader.fieldnames or [])
    except OSError as exc:
        raise DataFileError(f"Could not open CSV file: {csv_path}") from exc
    if not header:
        raise DataFileError(f"CSV file has no header row: {csv_path}")
    return header, rows


def dump_json(payload: Any) -> str:
    return json.dumps(payload, ensure_ascii=False, indent=2)
