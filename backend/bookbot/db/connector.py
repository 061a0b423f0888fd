from pathlib import Path
import aiosqlite

from ..configs.config import DB_PATH


class DatabaseConnector:
    def __init__(self, db_path: Path = DB_PATH):
        self.db_path = Path(db_path)

    def get_connection(self):
        """Returns a new database connection context manager."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        return aiosqlite.connect(str(self.db_path))
