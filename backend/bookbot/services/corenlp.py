"""Stanford CoreNLP client.

Talks to a CoreNLP server's ``/annotate`` endpoint and turns its JSON output
into the small structures the book filters need. Failures never raise: the
caller gets an empty result and extraction simply yields fewer filters.
"""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

import requests

from ..configs.config import (
    CORENLP_MAX_ATTEMPTS,
    CORENLP_PORT,
    CORENLP_RETRY_DELAY,
    CORENLP_TIMEOUT,
    CORENLP_URL,
)
from ..models.intents import EntitySpan, EntityType

logger = logging.getLogger(__name__)

KEY_PHRASE_POS = ("NN", "NNS", "JJ")


@dataclass(frozen=True)
class RetryPolicy:
    max_attempts: int = 3
    delay_seconds: float = 2.0


class CoreNLPClient:
    def __init__(
        self,
        base_url: str = CORENLP_URL,
        port: int = CORENLP_PORT,
        timeout: float = CORENLP_TIMEOUT,
        retry: Optional[RetryPolicy] = None,
        session: Optional[requests.Session] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.endpoint = f"{base_url.rstrip('/')}:{port}/annotate"
        self.timeout = timeout
        self.retry = retry or RetryPolicy(CORENLP_MAX_ATTEMPTS, CORENLP_RETRY_DELAY)
        self._session = session or requests.Session()
        self._sleep = sleep

    def close(self) -> None:
        self._session.close()

    def send_request(self, text: str, properties: Dict[str, Any]) -> Dict[str, Any]:
        """POST ``text`` for annotation; returns the decoded JSON or ``{}`` on any failure."""
        params = {
            "properties": json.dumps({**properties, "outputFormat": "json", "pipelineLanguage": "en"}),
        }
        try:
            response = self._session.post(
                self.endpoint,
                params=params,
                data=text.encode("utf-8"),
                headers={"Content-Type": "text/plain"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error("CoreNLP request failed: %s (properties=%s)", e, properties)
            return {}

        if response.status_code != 200:
            logger.error("CoreNLP request failed with status code: %s", response.status_code)
            return {}

        try:
            data = response.json()
        except ValueError:
            logger.error("CoreNLP returned a body that is not JSON")
            return {}
        if not isinstance(data, dict):
            logger.error("CoreNLP returned unexpected JSON type: %s", type(data).__name__)
            return {}
        return data

    def send_request_with_retry(self, text: str, properties: Dict[str, Any]) -> Dict[str, Any]:
        attempts = max(1, self.retry.max_attempts)
        for attempt in range(1, attempts + 1):
            response = self.send_request(text, properties)
            if response:
                return response
            if attempt < attempts:
                logger.warning("CoreNLP request failed, retrying... Attempt %d of %d.", attempt, attempts)
                self._sleep(self.retry.delay_seconds)

        logger.error("CoreNLP request failed after %d attempts.", attempts)
        return {}

    # --- Annotations ---
    def recognize_entities(self, text: str) -> List[EntitySpan]:
        response = self.send_request_with_retry(text, {"annotators": "ner"})

        entities: List[EntitySpan] = []
        for sentence in _list(response.get("sentences")):
            for token in _list(sentence.get("tokens") if isinstance(sentence, dict) else None):
                if not isinstance(token, dict):
                    continue
                tag = token.get("ner")
                if not tag or tag == "O" or "word" not in token:
                    continue
                entities.append(
                    EntitySpan(text=str(token["word"]), type=EntityType.from_tag(tag), tag=str(tag))
                )
        return entities

    def analyze_sentiment(self, text: str) -> Optional[str]:
        response = self.send_request_with_retry(text, {"annotators": "sentiment"})
        sentences = _list(response.get("sentences"))
        if not sentences or not isinstance(sentences[0], dict):
            return None
        return sentences[0].get("sentiment")

    def extract_key_phrases(self, text: str) -> List[str]:
        response = self.send_request_with_retry(text, {"annotators": "pos"})

        phrases: List[str] = []
        for sentence in _list(response.get("sentences")):
            words: List[str] = []
            for token in _list(sentence.get("tokens") if isinstance(sentence, dict) else None):
                if isinstance(token, dict) and token.get("pos") in KEY_PHRASE_POS:
                    words.append(str(token.get("word", "")))
                elif words:
                    phrases.append(" ".join(words))
                    words = []
            if words:
                phrases.append(" ".join(words))
        return phrases

    def analyze_text(self, text: str) -> Dict[str, Any]:
        return {
            "sentiment": self.analyze_sentiment(text),
            "entities": self.recognize_entities(text),
            "key_phrases": self.extract_key_phrases(text),
        }


def _list(value: Any) -> list:
    return value if isinstance(value, list) else []
