# app/api/deps.py
from __future__ import annotations

from fastapi import Request

from app.db.mongo_client import MongoConnectionCache
from app.services.notify_service import ContactNotifier


def get_mongo(request: Request) -> MongoConnectionCache:
    return request.app.state.mongo


def get_notifier(request: Request) -> ContactNotifier:
    return request.app.state.notifier
