from __future__ import annotations
import logging
from typing import Any, List, Mapping, Protocol, Sequence

from ..models.intents import EntitySpan, FilterSet, Intent
from ..models.schemas import ToolResult
from .dataset import BookDataset
from .filters import apply_filters, extract_filters
from .formatting import format_count_response, format_find_response
from .intent import classify_intent

logger = logging.getLogger(__name__)

FIND_LIMIT = 5
FIND_ERROR = "An error occurred while searching for books."
COUNT_ERROR = "An error occurred while counting books."


class EntityRecognizer(Protocol):
    def recognize_entities(self, text: str) -> Sequence[EntitySpan]: ...


class BookService:
    def __init__(self, dataset: BookDataset, recognizer: EntityRecognizer):
        self.dataset = dataset
        self.recognizer = recognizer

    def detect_intent(self, query: str) -> Intent:
        return classify_intent(query)

    def extract_filters(self, query: str) -> FilterSet:
        entities = self.recognizer.recognize_entities(query)
        logger.debug("Recognized entities: %s", entities)
        return extract_filters(query, entities)

    def _matching_books(self, query: str) -> List[Mapping[str, Any]]:
        filters = self.extract_filters(query)
        books = apply_filters(self.dataset.books, filters)
        logger.debug("%d books match filters %s", len(books), filters)
        return books

    def find_books(self, query: str, save_to_history: bool = True) -> ToolResult:
        try:
            books = self._matching_books(query)
            text = format_find_response(books[:FIND_LIMIT], self.dataset.fields)
        except Exception:
            logger.exception("Error searching for books (query=%r)", query)
            return ToolResult(text=FIND_ERROR, save_to_history=save_to_history)

        if not save_to_history:
            logger.info("Response for query (not saved to history): %s", text)
        return ToolResult(text=text, save_to_history=save_to_history)

    def count_books(self, query: str) -> str:
        try:
            books = self._matching_books(query)
            return format_count_response(len(books))
        except Exception:
            logger.exception("Error counting books (query=%r)", query)
            return COUNT_ERROR
