from __future__ import annotations

from contextlib import asynccontextmanager
from datetime import datetime, timezone

import openai
from fastapi import FastAPI, HTTPException

from bookbot.configs.config import BOOKS_PATH, DB_PATH, DEBUG, HISTORY_CACHE_TTL, LOG_LEVEL
from bookbot.configs.log import configure_logging
from bookbot.db.connector import DatabaseConnector
from bookbot.db.initializer import DatabaseInitializer
from bookbot.db.crud import Crud
from bookbot.db.repository import Repository
from bookbot.models.api_schemas import ChatRequest, ChatResponse, ChatResponseBody, HealthResponse
from bookbot.services.books import BookService
from bookbot.services.cache import TTLCache
from bookbot.services.chatbot import ChatBotService
from bookbot.services.corenlp import CoreNLPClient
from bookbot.services.dataset import load_dataset
from bookbot.services.history import ConversationStore
from bookbot.services.openai_gateway import OpenAIDecisionOracle
from bookbot.services.session import SessionStore


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(LOG_LEVEL, debug=DEBUG)

    # 1) Dataset (a missing or malformed file aborts startup)
    dataset = load_dataset(BOOKS_PATH)

    # 2) Database
    connector = DatabaseConnector(DB_PATH)
    await DatabaseInitializer().init(connector)
    repo = Repository(Crud(connector))

    # 3) Services
    corenlp = CoreNLPClient()
    history = ConversationStore(repo, TTLCache(default_ttl_seconds=HISTORY_CACHE_TTL))
    books = BookService(dataset, corenlp)
    chatbot = ChatBotService(
        books=books,
        oracle=OpenAIDecisionOracle(),
        history=history,
        sessions=SessionStore(),
    )

    # 4) Expose on app.state so routes can use them
    app.state.dataset = dataset
    app.state.corenlp = corenlp
    app.state.books = books
    app.state.chatbot = chatbot

    yield

    corenlp.close()


app = FastAPI(
    title="Book Dataset ChatBot",
    lifespan=lifespan,
)


@app.post("/chat", response_model=ChatResponse)
async def chat(payload: ChatRequest):
    if not payload.query.strip():
        raise HTTPException(400, "Empty query")
    try:
        text = await app.state.chatbot.process_query(payload.query, payload.user_id)
    except openai.APIConnectionError:
        raise HTTPException(503, "Failed to connect to the chat service.")
    return ChatResponse(
        response=ChatResponseBody(text=text, timestamp=datetime.now(timezone.utc))
    )


@app.delete("/conversations/{user_id}")
async def trash_conversation(user_id: int):
    moved = await app.state.chatbot.trash_conversation(user_id)
    return {"detail": "Conversation moved to trash", "messages": moved}


@app.get("/health", response_model=HealthResponse)
async def health():
    return HealthResponse(books=len(app.state.dataset))
