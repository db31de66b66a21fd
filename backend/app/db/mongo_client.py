# app/db/mongo_client.py
from __future__ import annotations

import threading
from concurrent.futures import Future
from enum import Enum
from typing import Any, Callable, Optional

from pymongo import MongoClient
from pymongo.database import Database

from app.settings import Settings


class MongoConfigError(RuntimeError):
    """Raised when the connection string is missing."""


class ConnectionState(str, Enum):
    UNINITIALIZED = "uninitialized"
    CONNECTING = "connecting"
    READY = "ready"


class MongoConnectionCache:
    """
    Lazily opens one MongoClient per process and hands out its database.

    Callers that arrive while the first attempt is still running wait on the
    same attempt (single-flight). A failed attempt is published to every
    waiter and then forgotten, so the next acquire() starts over.
    """

    def __init__(self, settings: Settings, client_factory: Callable[..., Any] = MongoClient):
        self._settings = settings
        self._client_factory = client_factory
        self._lock = threading.Lock()
        self._client: Optional[Any] = None
        self._db: Optional[Database] = None
        self._inflight: Optional[Future] = None

    @property
    def state(self) -> ConnectionState:
        with self._lock:
            if self._db is not None:
                return ConnectionState.READY
            if self._inflight is not None:
                return ConnectionState.CONNECTING
            return ConnectionState.UNINITIALIZED

    def acquire(self) -> Database:
        db = self._db
        if db is not None:
            return db

        uri = self._settings.MONGO_URI
        if not uri:
            raise MongoConfigError("MONGO_URI environment variable is not defined")

        with self._lock:
            if self._db is not None:
                return self._db
            attempt = self._inflight
            leader = attempt is None
            if leader:
                attempt = self._inflight = Future()

        if leader:
            self._connect(uri, attempt)
        return attempt.result()

    def _connect(self, uri: str, attempt: Future) -> None:
        s = self._settings
        client = None
        try:
            client = self._client_factory(
                uri,
                serverSelectionTimeoutMS=s.MONGO_SERVER_SELECTION_TIMEOUT_MS,
                connectTimeoutMS=s.MONGO_CONNECT_TIMEOUT_MS,
                socketTimeoutMS=s.MONGO_SOCKET_TIMEOUT_MS,
            )
            # MongoClient connects lazily; force a round trip now
            client.admin.command("ping")
            db = client[s.MONGO_DB]
        except BaseException as e:
            # waiters must never be left on an unresolved attempt
            with self._lock:
                self._inflight = None
            attempt.set_exception(e)
            print("[db] MongoDB connection failed:", repr(e))
            if client is not None:
                client.close()
            if not isinstance(e, Exception):
                raise
            return

        with self._lock:
            self._client = client
            self._db = db
            self._inflight = None
        print(f"[db] Connected to MongoDB (db={s.MONGO_DB})")
        attempt.set_result(db)

    def close(self) -> None:
        with self._lock:
            client = self._client
            self._client = None
            self._db = None
        if client is not None:
            client.close()
            print("[db] MongoDB connection closed")
