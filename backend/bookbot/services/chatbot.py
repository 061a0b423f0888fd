from __future__ import annotations
import asyncio
import logging
from typing import Optional

import openai

from ..models.intents import Intent
from ..models.schemas import Decision, HistoryMessage, ToolResult
from .books import BookService
from .history import ConversationStore
from .openai_gateway import DecisionOracle
from .session import SessionStore

logger = logging.getLogger(__name__)

CANNOT_PROCESS = "Sorry, I could not process your request."
ORACLE_ERROR = "An error occurred while processing your query."
RESET_DONE = "Conversation history has been reset."
RESET_ERROR = "An error occurred while resetting the conversation history."
GENERAL_INFO = (
    "I have a dataset of books covering a variety of authors, languages, and years. "
    "You can ask me to list books by specific criteria, such as by author, title, or year."
)


class ChatBotService:
    def __init__(
        self,
        books: BookService,
        oracle: DecisionOracle,
        history: ConversationStore,
        sessions: SessionStore,
    ):
        self.books = books
        self.oracle = oracle
        self.history = history
        self.sessions = sessions

    async def process_query(self, query: str, user_id: int) -> str:
        """
        1) Drop cached history if a reset is pending for this session
        2) Append the user turn to the history
        3) Let the decision oracle pick a direct answer or a book operation
        4) Persist the exchange when the result asks for it
        """
        logger.debug("User %s query: %s", user_id, query)

        if self.sessions.consume_reset(user_id):
            logger.debug("Reset pending for user %s, starting from an empty history", user_id)
            await self.history.forget(user_id)

        conversation = await self.history.get_history(user_id)
        user_turn = HistoryMessage(role="user", content=query)
        conversation.append(user_turn)

        try:
            decision = self.oracle.decide(conversation)
        except openai.APIConnectionError:
            raise
        except openai.APIError as e:
            logger.error("Decision oracle error: %s", e)
            return ORACLE_ERROR

        result = await self._dispatch(decision, user_id)
        logger.debug("Response text=%r save_to_history=%s", result.text, result.save_to_history)

        if result.save_to_history:
            await self.history.append(
                user_id, [user_turn, HistoryMessage(role="assistant", content=result.text)]
            )
        else:
            logger.debug("Skipping saving conversation history for this response.")

        return result.text

    async def _dispatch(self, decision: Decision, user_id: int) -> ToolResult:
        if not decision.is_function_call:
            return ToolResult(text=decision.text or CANNOT_PROCESS)

        name = decision.function_name
        query = str(decision.arguments.get("query") or "")

        if name == "resetConversation":
            return await self.reset_conversation(user_id, query)

        intent = self.books.detect_intent(query)
        if intent is Intent.FIND and name == "findBooks":
            save = decision.arguments.get("saveToHistory", True)
            return await asyncio.to_thread(
                self.books.find_books, query, save_to_history=str(save).lower() != "false"
            )
        if intent is Intent.COUNT:
            return ToolResult(text=await asyncio.to_thread(self.books.count_books, query))
        if intent is Intent.GENERAL_INFO:
            return ToolResult(text=decision.text or GENERAL_INFO)

        logger.debug("Intent %s does not fit function %s", intent.value, name)
        return ToolResult(text=CANNOT_PROCESS)

    async def reset_conversation(self, user_id: int, query: Optional[str] = None) -> ToolResult:
        logger.debug("Resetting conversation for user %s with query: %s", user_id, query)
        try:
            await self.history.reset(user_id)
        except Exception:
            logger.exception("Error resetting conversation for user %s", user_id)
            return ToolResult(text=RESET_ERROR, save_to_history=False)
        self.sessions.mark_reset(user_id)
        return ToolResult(text=RESET_DONE, save_to_history=False)

    async def trash_conversation(self, user_id: int) -> int:
        return await self.history.trash(user_id)
