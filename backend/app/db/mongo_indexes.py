# app/db/mongo_indexes.py
from pymongo import ASCENDING, DESCENDING
from pymongo.database import Database


def ensure_indexes(db: Database) -> None:
    db.products.create_index([("display_order", ASCENDING)])
    db.products.create_index([("is_featured", ASCENDING), ("display_order", ASCENDING)])
    db.categories.create_index([("display_order", ASCENDING)])
    db.testimonials.create_index([("is_active", ASCENDING), ("display_order", ASCENDING)])
    db.contact_submissions.create_index([("created_at", DESCENDING)])
