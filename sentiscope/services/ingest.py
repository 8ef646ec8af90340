from __future__ import annotations

import csv
import io
import json
from pathlib import PurePath
from typing import Any, List

from ..schemas import BatchItem

TEXT_FIELDS = ("text", "content", "message", "review", "comment")


class IngestError(ValueError):
    """Raised when uploaded content cannot be turned into texts."""


class UnsupportedFileError(IngestError):
    """Raised for file types without a parser."""


def texts_from_txt(content: str) -> List[str]:
    return [line.strip() for line in content.splitlines() if line.strip()]


def texts_from_csv(content: str) -> List[str]:
    """First column of every row after the header."""
    rows = list(csv.reader(io.StringIO(content)))
    texts = []
    for row in rows[1:]:
        if not row:
            continue
        value = row[0].replace('"', "").strip()
        if value:
            texts.append(value)
    return texts


def _text_of(item: Any) -> str:
    if isinstance(item, str):
        return item
    if isinstance(item, dict):
        for field in TEXT_FIELDS:
            value = item.get(field)
            if value:
                return str(value)
        return json.dumps(item)
    if item is None:
        return ""
    if isinstance(item, bool):
        return json.dumps(item)
    return str(item)


def texts_from_json(content: str) -> List[str]:
    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise IngestError("Invalid JSON format") from exc

    if isinstance(data, list):
        return [text for text in (_text_of(item) for item in data) if text]
    if isinstance(data, dict):
        return [
            value for value in data.values() if isinstance(value, str) and len(value) > 10
        ]
    return []


_PARSERS = {
    ".txt": texts_from_txt,
    ".csv": texts_from_csv,
    ".json": texts_from_json,
}


def items_from_file(filename: str, content: str) -> List[BatchItem]:
    """Split an uploaded file into batch items labelled with its name."""
    suffix = PurePath(filename).suffix.lower()
    parser = _PARSERS.get(suffix)
    if parser is None:
        raise UnsupportedFileError(f"Unsupported file type: {suffix or filename}")
    return [BatchItem(text=text, source=filename) for text in parser(content)]
