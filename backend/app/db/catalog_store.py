# app/db/catalog_store.py
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pymongo import ASCENDING
from pymongo.database import Database

BY_DISPLAY_ORDER = [("display_order", ASCENDING)]


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


class CatalogStore:
    def __init__(self, db: Database):
        self._db = db

    def list_products(self, featured_only: bool = False) -> List[Dict[str, Any]]:
        query: Dict[str, Any] = {"is_featured": True} if featured_only else {}
        return list(self._db.products.find(query).sort(BY_DISPLAY_ORDER))

    def list_categories(self) -> List[Dict[str, Any]]:
        return list(self._db.categories.find({}).sort(BY_DISPLAY_ORDER))

    def category_map(self) -> Dict[str, Dict[str, Any]]:
        return {str(c["_id"]): c for c in self._db.categories.find({})}

    def list_active_testimonials(self) -> List[Dict[str, Any]]:
        return list(self._db.testimonials.find({"is_active": True}).sort(BY_DISPLAY_ORDER))

    def create_contact_submission(self, fields: Dict[str, Any], now: Optional[datetime] = None) -> Dict[str, Any]:
        d = dict(fields)
        d.pop("_id", None)
        d.update({"status": "pending", "created_at": now or now_utc()})
        res = self._db.contact_submissions.insert_one(d)
        d["_id"] = res.inserted_id
        return d
