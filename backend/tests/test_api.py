"""Tests for the HTTP routes, with services stubbed on app.state."""

import sys
import unittest
from pathlib import Path

import httpx
import openai
from fastapi.testclient import TestClient

BACKEND_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(BACKEND_ROOT))

from bookbot.main import app
from bookbot.services.dataset import BookDataset


class StubChatBot:
    def __init__(self, reply: str = "There are 2 books matching your criteria.", error: Exception = None):
        self.reply = reply
        self.error = error
        self.calls = []

    async def process_query(self, query: str, user_id: int) -> str:
        self.calls.append((query, user_id))
        if self.error:
            raise self.error
        return self.reply

    async def trash_conversation(self, user_id: int) -> int:
        self.calls.append(("trash", user_id))
        return 4


class TestApi(unittest.TestCase):
    def setUp(self) -> None:
        # no context manager: lifespan (CoreNLP, OpenAI, SQLite) is not started
        self.client = TestClient(app)
        self.chatbot = StubChatBot()
        app.state.chatbot = self.chatbot
        app.state.dataset = BookDataset(fields=("Title",), books=({"Title": "Poems"},))

    def test_chat(self) -> None:
        response = self.client.post("/chat", json={"query": "How many books?", "user_id": 7})

        self.assertEqual(response.status_code, 200)
        body = response.json()["response"]
        self.assertEqual(body["text"], "There are 2 books matching your criteria.")
        self.assertEqual(body["source"], "bookbot")
        self.assertIn("timestamp", body)
        self.assertEqual(self.chatbot.calls, [("How many books?", 7)])

    def test_empty_query(self) -> None:
        response = self.client.post("/chat", json={"query": "   "})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(self.chatbot.calls, [])

    def test_oracle_unreachable(self) -> None:
        request = httpx.Request("POST", "https://api.openai.com/v1/responses")
        app.state.chatbot = StubChatBot(error=openai.APIConnectionError(request=request))
        response = self.client.post("/chat", json={"query": "hi"})
        self.assertEqual(response.status_code, 503)
        self.assertEqual(response.json()["detail"], "Failed to connect to the chat service.")

    def test_trash_conversation(self) -> None:
        response = self.client.delete("/conversations/7")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["messages"], 4)

    def test_health(self) -> None:
        response = self.client.get("/health")
        self.assertEqual(response.json(), {"status": "ok", "books": 1})


if __name__ == "__main__":
    unittest.main()
