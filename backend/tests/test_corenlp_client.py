"""Tests for the CoreNLP client: request shape, token flattening, retries and degradation."""

import json
import sys
import unittest
from pathlib import Path
from unittest.mock import MagicMock

import requests

BACKEND_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(BACKEND_ROOT))

from bookbot.models.intents import EntityType
from bookbot.services.corenlp import CoreNLPClient, RetryPolicy

NER_RESPONSE = {
    "sentences": [
        {
            "tokens": [
                {"word": "Show", "ner": "O"},
                {"word": "italian", "ner": "NATIONALITY"},
                {"word": "books"},
                {"word": "1958", "ner": "DATE"},
            ]
        },
        {"tokens": [{"word": "Rome", "ner": "CITY"}, {"word": "Leopardi", "ner": "PERSON"}]},
    ]
}


def http_response(status: int = 200, body=None, invalid_json: bool = False) -> MagicMock:
    response = MagicMock()
    response.status_code = status
    if invalid_json:
        response.json.side_effect = ValueError("no json")
    else:
        response.json.return_value = body
    return response


class TestCoreNLPClient(unittest.TestCase):
    def setUp(self) -> None:
        self.session = MagicMock()
        self.sleeps = []
        self.client = CoreNLPClient(
            base_url="http://corenlp/",
            port=9000,
            timeout=4,
            retry=RetryPolicy(max_attempts=3, delay_seconds=2.0),
            session=self.session,
            sleep=self.sleeps.append,
        )

    def test_request_shape(self) -> None:
        self.session.post.return_value = http_response(body={"sentences": []})

        self.client.send_request("Poems by Leopardi", {"annotators": "ner"})

        args, kwargs = self.session.post.call_args
        self.assertEqual(args[0], "http://corenlp:9000/annotate")
        self.assertEqual(
            json.loads(kwargs["params"]["properties"]),
            {"annotators": "ner", "outputFormat": "json", "pipelineLanguage": "en"},
        )
        self.assertEqual(kwargs["data"], "Poems by Leopardi".encode("utf-8"))
        self.assertEqual(kwargs["headers"], {"Content-Type": "text/plain"})
        self.assertEqual(kwargs["timeout"], 4)

    def test_recognize_entities_flattens_tokens(self) -> None:
        self.session.post.return_value = http_response(body=NER_RESPONSE)

        entities = self.client.recognize_entities("Show italian books 1958 Rome Leopardi")

        self.assertEqual(
            [(e.text, e.type, e.tag) for e in entities],
            [
                ("italian", EntityType.NATIONALITY, "NATIONALITY"),
                ("1958", EntityType.DATE, "DATE"),
                ("Rome", EntityType.OTHER, "CITY"),
                ("Leopardi", EntityType.PERSON, "PERSON"),
            ],
        )
        self.assertEqual(self.sleeps, [])

    def test_non_200_degrades_to_no_entities_after_retries(self) -> None:
        self.session.post.return_value = http_response(status=500)

        with self.assertLogs("bookbot.services.corenlp", level="WARNING"):
            entities = self.client.recognize_entities("anything")

        self.assertEqual(entities, [])
        self.assertEqual(self.session.post.call_count, 3)
        self.assertEqual(self.sleeps, [2.0, 2.0])

    def test_network_error_returns_empty(self) -> None:
        self.session.post.side_effect = requests.ConnectionError("refused")
        with self.assertLogs("bookbot.services.corenlp", level="ERROR"):
            self.assertEqual(self.client.send_request("x", {}), {})

    def test_malformed_body_returns_empty(self) -> None:
        self.session.post.return_value = http_response(invalid_json=True)
        with self.assertLogs("bookbot.services.corenlp", level="ERROR"):
            self.assertEqual(self.client.send_request("x", {}), {})

        self.session.post.return_value = http_response(body=["not", "a", "dict"])
        with self.assertLogs("bookbot.services.corenlp", level="ERROR"):
            self.assertEqual(self.client.send_request("x", {}), {})

    def test_retry_stops_on_first_success(self) -> None:
        self.session.post.side_effect = [http_response(status=503), http_response(body=NER_RESPONSE)]

        with self.assertLogs("bookbot.services.corenlp", level="WARNING"):
            response = self.client.send_request_with_retry("x", {"annotators": "ner"})

        self.assertEqual(response, NER_RESPONSE)
        self.assertEqual(self.session.post.call_count, 2)
        self.assertEqual(self.sleeps, [2.0])

    def test_single_attempt_policy_never_sleeps(self) -> None:
        client = CoreNLPClient(
            retry=RetryPolicy(max_attempts=1, delay_seconds=5.0),
            session=self.session,
            sleep=self.sleeps.append,
        )
        self.session.post.return_value = http_response(status=500)
        with self.assertLogs("bookbot.services.corenlp", level="ERROR"):
            self.assertEqual(client.recognize_entities("x"), [])
        self.assertEqual(self.session.post.call_count, 1)
        self.assertEqual(self.sleeps, [])

    def test_sentiment(self) -> None:
        self.session.post.return_value = http_response(body={"sentences": [{"sentiment": "Positive"}, {"sentiment": "Negative"}]})
        self.assertEqual(self.client.analyze_sentiment("I love books"), "Positive")

    def test_key_phrases(self) -> None:
        body = {
            "sentences": [
                {
                    "tokens": [
                        {"word": "the", "pos": "DT"},
                        {"word": "old", "pos": "JJ"},
                        {"word": "man", "pos": "NN"},
                        {"word": "and", "pos": "CC"},
                        {"word": "sea", "pos": "NN"},
                    ]
                }
            ]
        }
        self.session.post.return_value = http_response(body=body)
        self.assertEqual(self.client.extract_key_phrases("the old man and sea"), ["old man", "sea"])

    def test_analyze_text(self) -> None:
        self.session.post.return_value = http_response(body=NER_RESPONSE)
        analysis = self.client.analyze_text("x")
        self.assertEqual(set(analysis), {"sentiment", "entities", "key_phrases"})
        self.assertEqual(len(analysis["entities"]), 4)


if __name__ == "__main__":
    unittest.main()
