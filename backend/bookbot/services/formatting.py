from __future__ import annotations
from typing import Any, Iterable, Mapping, Sequence

NO_MATCHES = "No books found matching your criteria."
FIND_HEADER = "Here are some books that match your criteria:\n"


def _format_book(book: Mapping[str, Any], fields: Sequence[str]) -> str:
    normalized = {str(k).lower(): v for k, v in book.items()}
    details = []
    for field in fields:
        value = normalized.get(field.lower())
        if value is None or value == "":
            continue
        details.append(f"{field[:1].upper()}{field[1:]}: {value}")
    return ", ".join(details)


def format_find_response(books: Iterable[Mapping[str, Any]], fields: Sequence[str]) -> str:
    books = list(books)
    if not books:
        return NO_MATCHES
    return FIND_HEADER + "\n".join(_format_book(b, fields) for b in books)


def format_count_response(count: int) -> str:
    if count > 0:
        return f"There are {count} books matching your criteria."
    return NO_MATCHES
