"""
Query-to-filter translation and filter evaluation over book records.

Extraction turns recognised entity spans plus a few regex scans of the raw
query into a ``FilterSet``:

    {"Language": "Italian", "Pages": {"<": 500}, "Year": {"<": 0}}

Rule order matters. String-valued fields are last-write-wins, operator maps
merge by operator key:

    1. "old" / "oldest" anywhere in the query  -> Year < 0 (BCE works)
    2. entities, in recognition order
         PERSON -> Author, WORK_OF_ART -> Title,
         LANGUAGE / NATIONALITY -> Language, LOCATION -> Country,
         DATE -> Year with <, > or = depending on "before"/"after" wording
    3. page phrasing: "under N pages", "more than N pages", "approximately N pages"
    4. "books by <name>" -> Author (overrides any PERSON entity)

Evaluation keeps the input order and ANDs every field constraint.
"""

from __future__ import annotations
import logging
import math
import re
from typing import Any, Iterable, List, Mapping, Optional, Sequence

from ..models.intents import EntitySpan, EntityType, FilterSet

logger = logging.getLogger(__name__)

ENTITY_FIELDS = {
    EntityType.PERSON: "Author",
    EntityType.WORK_OF_ART: "Title",
    EntityType.LANGUAGE: "Language",
    EntityType.NATIONALITY: "Language",
    EntityType.LOCATION: "Country",
}

# First matching pattern wins
PAGE_PATTERNS = (
    (re.compile(r"under\s+(?:the\s+)?(\d+)\s*pages", re.IGNORECASE), "<"),
    (re.compile(r"more than\s+(?:the\s+)?(\d+)\s*pages", re.IGNORECASE), ">"),
    (re.compile(r"approximately\s+(?:the\s+)?(\d+)\s*pages", re.IGNORECASE), "="),
)
BOOKS_BY_PATTERN = re.compile(r"books\s+by\s+([a-zA-Z\s]+)", re.IGNORECASE)
LEADING_INT_PATTERN = re.compile(r"^\s*([+-]?\d+)")
# ASCII decimal, optional fraction and exponent; no "_" separators, "inf" or "nan"
NUMERIC_PATTERN = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$", re.ASCII)


def capitalize(text: str) -> str:
    return text[:1].upper() + text[1:]


def leading_int(text: Any) -> int:
    m = LEADING_INT_PATTERN.match(str(text))
    return int(m.group(1)) if m else 0


def _set_operator(filters: FilterSet, field: str, operator: str, value: int) -> None:
    current = filters.get(field)
    if not isinstance(current, dict):
        current = {}
        filters[field] = current
    current[operator] = value


def extract_filters(query: str, entities: Iterable[EntitySpan]) -> FilterSet:
    q = (query or "").lower()
    filters: FilterSet = {}

    # Plain substring: covers "oldest", and also "household"
    if "old" in q:
        _set_operator(filters, "Year", "<", 0)

    for entity in entities:
        if not entity.text:
            continue
        kind = entity.type if isinstance(entity.type, EntityType) else EntityType.from_tag(str(entity.type))

        field = ENTITY_FIELDS.get(kind)
        if field:
            filters[field] = capitalize(entity.text)
            continue

        if kind is EntityType.DATE:
            number = leading_int(entity.text)
            if "before" in q or "older than" in q:
                _set_operator(filters, "Year", "<", number)
            elif "after" in q or "newer than" in q:
                _set_operator(filters, "Year", ">", number)
            else:
                _set_operator(filters, "Year", "=", number)

    for pattern, operator in PAGE_PATTERNS:
        m = pattern.search(query or "")
        if m:
            _set_operator(filters, "Pages", operator, int(m.group(1)))
            break

    m = BOOKS_BY_PATTERN.search(query or "")
    if m:
        filters["Author"] = m.group(1).strip()

    logger.debug("Extracted filters: %s", filters)
    return filters


# --- Evaluation ---

def _as_number(value: Any) -> Optional[int]:
    """Integer view of a numeric value or numeric string; None when not numeric."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str):
        if not NUMERIC_PATTERN.match(value):
            return None
        s = value.strip()
        if re.fullmatch(r"[+-]?\d+", s, re.ASCII):
            return int(s)
        f = float(s)
        return int(f) if math.isfinite(f) else None
    return None


def _compare(book_value: int, operator: str, threshold: int) -> bool:
    if operator == "<":
        return book_value < threshold
    if operator == ">":
        return book_value > threshold
    if operator == "=":
        return book_value == threshold
    if operator == "<=":
        return book_value <= threshold
    if operator == ">=":
        return book_value >= threshold
    return False


def matches(record: Mapping[str, Any], filters: FilterSet) -> bool:
    normalized = {str(k).lower(): v for k, v in record.items()}

    for key, expected in filters.items():
        book_value = normalized.get(str(key).lower())
        if book_value is None:
            return False

        if isinstance(expected, dict):
            number = _as_number(book_value)
            if number is None:
                return False
            for operator, threshold in expected.items():
                limit = _as_number(threshold)
                if not _compare(number, operator, limit if limit is not None else 0):
                    return False
        else:
            if not isinstance(book_value, str) or not isinstance(expected, str):
                return False
            if book_value.lower() != expected.lower():
                return False

    return True


def apply_filters(records: Sequence[Mapping[str, Any]], filters: FilterSet) -> List[Mapping[str, Any]]:
    return [r for r in records if matches(r, filters)]
