from .connector import DatabaseConnector


class DatabaseInitializer:
    async def init(self, connector: DatabaseConnector):
        async with connector.get_connection() as conn:
            await conn.executescript(
                """
                -- Conversation history, one row per turn
                CREATE TABLE IF NOT EXISTS conversation_messages (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    user_id INTEGER NOT NULL,
                    role TEXT NOT NULL CHECK (role IN ('user', 'assistant')),
                    content TEXT NOT NULL,
                    deleted INTEGER NOT NULL DEFAULT 0, -- 0 live, 1 reset, 2 trashed
                    trashed_at TIMESTAMP,
                    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                );

                CREATE INDEX IF NOT EXISTS idx_conversation_messages_user
                    ON conversation_messages (user_id, deleted);
                """
            )
            await conn.commit()
