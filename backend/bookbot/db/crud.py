from typing import Any, List, Sequence, Tuple
from .connector import DatabaseConnector

LIVE = 0
RESET = 1
TRASHED = 2


def _row_to_dict(description: Sequence[Tuple], row: Tuple[Any, ...]) -> dict:
    return {desc[0]: value for desc, value in zip(description, row)}


class Crud:
    def __init__(self, connector: DatabaseConnector):
        self.connector = connector

    # ---------- Conversation messages ----------
    async def add_messages(self, user_id: int, messages: Sequence[Tuple[str, str]]) -> List[int]:
        ids = []
        async with self.connector.get_connection() as conn:
            for role, content in messages:
                cur = await conn.execute(
                    "INSERT INTO conversation_messages (user_id, role, content) VALUES (?, ?, ?)",
                    (user_id, role, content),
                )
                ids.append(cur.lastrowid)
            await conn.commit()
        return ids

    async def list_messages(self, user_id: int, deleted: int = LIVE) -> List[dict]:
        async with self.connector.get_connection() as conn:
            cur = await conn.execute(
                "SELECT id, user_id, role, content, deleted, created_at, trashed_at "
                "FROM conversation_messages WHERE user_id=? AND deleted=? ORDER BY id ASC",
                (user_id, deleted),
            )
            rows = await cur.fetchall()
            return [_row_to_dict(cur.description, r) for r in rows]

    async def reset_messages(self, user_id: int) -> int:
        async with self.connector.get_connection() as conn:
            # Soft delete
            cur = await conn.execute(
                "UPDATE conversation_messages SET deleted=? WHERE user_id=? AND deleted=?",
                (RESET, user_id, LIVE),
            )
            await conn.commit()
            return cur.rowcount

    async def trash_messages(self, user_id: int) -> int:
        async with self.connector.get_connection() as conn:
            cur = await conn.execute(
                "UPDATE conversation_messages SET deleted=?, trashed_at=CURRENT_TIMESTAMP "
                "WHERE user_id=? AND deleted=?",
                (TRASHED, user_id, LIVE),
            )
            await conn.commit()
            return cur.rowcount
