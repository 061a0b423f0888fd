from typing import List, Sequence
from .crud import Crud, LIVE
from ..models.schemas import HistoryMessage, StoredMessage


class Repository:
    def __init__(self, crud: Crud):
        self.crud = crud

    async def append_messages(self, user_id: int, messages: Sequence[HistoryMessage]) -> List[int]:
        return await self.crud.add_messages(user_id, [(m.role, m.content) for m in messages])

    async def list_messages(self, user_id: int, deleted: int = LIVE) -> List[StoredMessage]:
        rows = await self.crud.list_messages(user_id, deleted=deleted)
        return [StoredMessage(**r) for r in rows]

    async def reset_conversation(self, user_id: int) -> int:
        return await self.crud.reset_messages(user_id)

    async def trash_conversation(self, user_id: int) -> int:
        return await self.crud.trash_messages(user_id)
