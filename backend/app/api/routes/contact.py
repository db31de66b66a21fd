# app/api/routes/contact.py
from __future__ import annotations

import traceback
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from app.api.deps import get_mongo, get_notifier
from app.db.catalog_store import CatalogStore
from app.db.mongo_client import MongoConnectionCache
from app.schemas.catalog import ContactSubmissionResponse, ErrorResponse
from app.services.notify_service import ContactNotifier

router = APIRouter(responses={500: {"model": ErrorResponse}})


@router.post("/contact", response_model=ContactSubmissionResponse)
def submit_contact(
    payload: Optional[Dict[str, Any]] = Body(default=None),
    mongo: MongoConnectionCache = Depends(get_mongo),
    notifier: ContactNotifier = Depends(get_notifier),
):
    try:
        store = CatalogStore(mongo.acquire())
        submission = store.create_contact_submission(payload or {})
    except Exception as e:
        print("[ERROR] Error submitting contact form:", e)
        traceback.print_exc()
        return JSONResponse(status_code=500, content=ErrorResponse(error="Failed to submit contact form").model_dump(exclude_none=True))

    submission_id = str(submission["_id"])
    notifier.notify(submission, submission_id)
    return ContactSubmissionResponse(success=True, id=submission_id)
