from __future__ import annotations
import logging
from typing import List, Sequence

from ..configs.config import HISTORY_CACHE_TTL
from ..db.repository import Repository
from ..models.schemas import HistoryMessage
from .cache import TTLCache

logger = logging.getLogger(__name__)


def _cache_key(user_id: int) -> str:
    return f"conversation_history:{user_id}"


class ConversationStore:
    """Per-user chat history persisted in SQLite and fronted by a TTL cache."""

    def __init__(self, repo: Repository, cache: TTLCache, ttl_seconds: int = HISTORY_CACHE_TTL):
        self.repo = repo
        self.cache = cache
        self.ttl_seconds = ttl_seconds

    async def get_history(self, user_id: int) -> List[HistoryMessage]:
        key = _cache_key(user_id)
        cached = await self.cache.get(key)
        if cached is not None:
            logger.debug("Cache hit for conversation history of user %s", user_id)
            return list(cached)

        async def load() -> List[HistoryMessage]:
            stored = await self.repo.list_messages(user_id)
            return [HistoryMessage(role=m.role, content=m.content) for m in stored]

        return list(await self.cache.remember(key, load, ttl_seconds=self.ttl_seconds))

    async def append(self, user_id: int, messages: Sequence[HistoryMessage]) -> None:
        if not messages:
            return
        await self.repo.append_messages(user_id, messages)
        await self.forget(user_id)
        logger.debug("Saved %d messages for user %s", len(messages), user_id)

    async def forget(self, user_id: int) -> None:
        await self.cache.delete(_cache_key(user_id))

    async def reset(self, user_id: int) -> int:
        removed = await self.repo.reset_conversation(user_id)
        await self.forget(user_id)
        logger.info("Conversation history reset for user %s (%d messages)", user_id, removed)
        return removed

    async def trash(self, user_id: int) -> int:
        moved = await self.repo.trash_conversation(user_id)
        await self.forget(user_id)
        logger.info("Moved %d messages of user %s to trash", moved, user_id)
        return moved
