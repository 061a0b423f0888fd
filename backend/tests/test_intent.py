"""Tests for keyword-based intent classification."""

import sys
import unittest
from pathlib import Path

BACKEND_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(BACKEND_ROOT))

from bookbot.models.intents import Intent
from bookbot.services.intent import classify_intent


class TestClassifyIntent(unittest.TestCase):
    def test_general_info_phrases_ignore_case_and_whitespace(self) -> None:
        for query in (
            "Which books do you have?",
            "   WHAT BOOKS ARE AVAILABLE  ",
            "tell me about your books please",
        ):
            with self.subTest(query=query):
                self.assertEqual(classify_intent(query), Intent.GENERAL_INFO)

    def test_general_info_wins_over_count_keywords(self) -> None:
        self.assertEqual(classify_intent("Count them: which books do you have?"), Intent.GENERAL_INFO)

    def test_count_keywords(self) -> None:
        self.assertEqual(classify_intent("How many Italian books under 300 pages?"), Intent.COUNT)
        self.assertEqual(classify_intent("count the books by Homer"), Intent.COUNT)

    def test_count_wins_over_find_keywords(self) -> None:
        self.assertEqual(classify_intent("Show me how many books are in French"), Intent.COUNT)

    def test_count_requires_whole_word(self) -> None:
        self.assertEqual(classify_intent("books about a country"), Intent.FIND)

    def test_find_keywords(self) -> None:
        for query in ("list all Italian books", "Show me the oldest books", "find Kafka", "What are the books from 1958?"):
            with self.subTest(query=query):
                self.assertEqual(classify_intent(query), Intent.FIND)

    def test_default_is_find(self) -> None:
        self.assertEqual(classify_intent("Italian poetry"), Intent.FIND)
        self.assertEqual(classify_intent(""), Intent.FIND)


if __name__ == "__main__":
    unittest.main()
