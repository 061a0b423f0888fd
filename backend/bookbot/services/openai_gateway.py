from __future__ import annotations
import json
import logging
from typing import Any, Dict, List, Optional, Protocol, Sequence

from openai import OpenAI

from ..configs.config import OPENAI_MAX_OUTPUT_TOKENS, OPENAI_MODEL
from ..models.schemas import Decision, HistoryMessage

logger = logging.getLogger(__name__)

SYSTEM_INSTRUCTIONS = (
    "You are an assistant for exploring a fixed dataset of books. "
    "Use findBooks to list books matching criteria such as author, title, language, country, year or pages, "
    "countBooks to count them, and resetConversation when the user asks to start over. "
    "Pass the user's request as the 'query' argument in their own words. "
    "Only answer questions about the books in the dataset."
)


class DecisionOracle(Protocol):
    def decide(self, history: Sequence[HistoryMessage]) -> Decision: ...


def get_tools_definition() -> List[Dict[str, Any]]:
    return [
        {
            "type": "function",
            "name": "findBooks",
            "description": (
                "Search for books in the dataset based on criteria such as language, year, title, author, "
                'or specific queries like "oldest books" or "books under 300 pages".'
            ),
            "parameters": {
                "type": "object",
                "properties": {
                    "query": {
                        "type": "string",
                        "description": 'Search criteria, e.g. "list all Italian books" or "books by Giacomo Leopardi".',
                    },
                    "saveToHistory": {
                        "type": "boolean",
                        "description": "Whether to save the result to conversation history.",
                    },
                },
                "required": ["query", "saveToHistory"],
                "additionalProperties": False,
            },
        },
        {
            "type": "function",
            "name": "countBooks",
            "description": "Count books in the dataset matching criteria such as language, year, title or author.",
            "parameters": {
                "type": "object",
                "properties": {
                    "query": {
                        "type": "string",
                        "description": 'Counting request, e.g. "How many books in Italian language?".',
                    },
                },
                "required": ["query"],
                "additionalProperties": False,
            },
        },
        {
            "type": "function",
            "name": "resetConversation",
            "description": "Delete/Reset the conversation history and start a new conversation.",
            "parameters": {
                "type": "object",
                "properties": {
                    "query": {
                        "type": "string",
                        "description": 'The reset request, e.g. "reset our conversation".',
                    },
                },
                "required": ["query"],
                "additionalProperties": False,
            },
        },
    ]


class OpenAIDecisionOracle:
    def __init__(
        self,
        client: Optional[OpenAI] = None,
        model: str = OPENAI_MODEL,
        max_output_tokens: int = OPENAI_MAX_OUTPUT_TOKENS,
    ):
        self.client = client or OpenAI()
        self.model = model
        self.max_output_tokens = max_output_tokens

    def decide(self, history: Sequence[HistoryMessage]) -> Decision:
        input_messages = [{"role": "system", "content": SYSTEM_INSTRUCTIONS}]
        input_messages.extend({"role": m.role, "content": m.content} for m in history)

        resp = self.client.responses.create(
            model=self.model,
            input=input_messages,
            tools=get_tools_definition(),
            tool_choice="auto",
            max_output_tokens=self.max_output_tokens,
        )

        text = (resp.output_text or "").strip() or None
        for item in resp.output:
            if getattr(item, "type", None) != "function_call":
                continue
            try:
                arguments = json.loads(item.arguments or "{}")
            except json.JSONDecodeError:
                logger.warning("Function call %s carried invalid JSON arguments: %r", item.name, item.arguments)
                arguments = {}
            if not isinstance(arguments, dict):
                arguments = {}
            logger.debug("Oracle chose %s(%s)", item.name, arguments)
            return Decision(text=text, function_name=item.name, arguments=arguments)

        return Decision(text=text)
