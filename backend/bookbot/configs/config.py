# Configuration settings
import os
from pathlib import Path

PACKAGE_ROOT = Path(__file__).resolve().parents[1]

BOOKS_PATH = Path(os.getenv("BOOKS_PATH", str(PACKAGE_ROOT / "data" / "books.json")))
DB_PATH = Path(os.getenv("DB_PATH", "data/bookbot.db"))

# CoreNLP server used for entity recognition
CORENLP_URL = os.getenv("CORENLP_URL", "http://localhost")
CORENLP_PORT = int(os.getenv("CORENLP_PORT", "9000"))
CORENLP_TIMEOUT = float(os.getenv("CORENLP_TIMEOUT", "5"))
CORENLP_MAX_ATTEMPTS = int(os.getenv("CORENLP_MAX_ATTEMPTS", "3"))
CORENLP_RETRY_DELAY = float(os.getenv("CORENLP_RETRY_DELAY", "2.0"))

OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4.1-nano")
OPENAI_MAX_OUTPUT_TOKENS = int(os.getenv("OPENAI_MAX_OUTPUT_TOKENS", "600"))

HISTORY_CACHE_TTL = int(os.getenv("HISTORY_CACHE_TTL", "3600"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
DEBUG = os.getenv("DEBUG", "False") == "True"
