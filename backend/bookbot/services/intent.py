from __future__ import annotations
import re

from ..models.intents import Intent

GENERAL_INFO_PATTERN = re.compile(
    r"\b(which books do you have|what books are available|tell me about your books)\b"
)
COUNT_PATTERN = re.compile(r"\bhow many\b|\bcount\b")
FIND_PATTERN = re.compile(r"\blist\b|\bshow\b|\bfind\b|\bwhat are\b|\bwhich\b")


def classify_intent(query: str) -> Intent:
    """Map a free-text query to find / count / general_info.

    Checks run in priority order. Queries with no recognised keyword are
    treated as ``find``, never as ``general_info``.
    """
    q = (query or "").strip().lower()

    if GENERAL_INFO_PATTERN.search(q):
        return Intent.GENERAL_INFO
    if COUNT_PATTERN.search(q):
        return Intent.COUNT
    if FIND_PATTERN.search(q):
        return Intent.FIND
    return Intent.FIND
