#!/usr/bin/env python3

import sys
from pathlib import Path

# Add the backend directory to Python path
sys.path.insert(0, str(Path(__file__).parent))

from bookbot.configs.config import BOOKS_PATH
from bookbot.services.corenlp import CoreNLPClient
from bookbot.services.dataset import load_dataset
from bookbot.services.filters import apply_filters, extract_filters
from bookbot.services.formatting import format_count_response, format_find_response
from bookbot.services.intent import classify_intent


def debug_filters(query: str):
    dataset = load_dataset(BOOKS_PATH)
    print(f"=== Dataset: {len(dataset)} books, fields: {', '.join(dataset.fields)} ===")

    print(f"\nQuery: {query!r}")
    print(f"Intent: {classify_intent(query).value}")

    client = CoreNLPClient()
    try:
        analysis = client.analyze_text(query)
    finally:
        client.close()

    print("\n=== CoreNLP analysis ===")
    print(f"Sentiment: {analysis['sentiment']}")
    print(f"Key phrases: {analysis['key_phrases']}")
    for entity in analysis["entities"]:
        print(f"- {entity.text!r}: {entity.type.value} (tag {entity.tag})")
    if not analysis["entities"]:
        print("No entities (is the CoreNLP server running?)")

    filters = extract_filters(query, analysis["entities"])
    print(f"\n=== Filters ===\n{filters}")

    matches = apply_filters(dataset.books, filters)
    print(f"\n=== {format_count_response(len(matches))} ===")
    print(format_find_response(matches[:5], dataset.fields))


if __name__ == "__main__":
    debug_filters(" ".join(sys.argv[1:]) or "Show me italian books under the 500 pages")
