from __future__ import annotations
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

logger = logging.getLogger(__name__)


class DatasetError(RuntimeError):
    """The books document is missing or malformed. Fatal at startup."""


@dataclass(frozen=True)
class BookDataset:
    fields: tuple
    books: tuple = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.books)

    @classmethod
    def from_document(cls, data: Any) -> "BookDataset":
        if not isinstance(data, dict):
            raise DatasetError("Books document must be a JSON object with 'fields' and 'books'")

        raw_fields = data.get("fields", [])
        # Older documents describe fields as {"Title": "string", ...}; only the keys matter
        if isinstance(raw_fields, dict):
            fields = tuple(str(k) for k in raw_fields.keys())
        elif isinstance(raw_fields, list):
            fields = tuple(str(f) for f in raw_fields)
        else:
            raise DatasetError("'fields' must be a list or an object")

        raw_books = data.get("books", [])
        if not isinstance(raw_books, list):
            raise DatasetError("'books' must be a list")
        books: List[Dict[str, Any]] = []
        for i, item in enumerate(raw_books):
            if not isinstance(item, dict):
                raise DatasetError(f"Book #{i} is not an object")
            books.append(dict(item))

        return cls(fields=fields, books=tuple(books))


def load_dataset(path: Path) -> BookDataset:
    path = Path(path)
    if not path.exists():
        raise DatasetError(f"Books dataset not found at: {path.resolve()}")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise DatasetError(f"Error decoding {path.name}: {e}") from e

    dataset = BookDataset.from_document(data)
    logger.info("Loaded %d books (%d fields) from %s", len(dataset), len(dataset.fields), path)
    return dataset
