# app/schemas/catalog.py
from __future__ import annotations

from typing import Optional
from pydantic import BaseModel


class ContactSubmissionResponse(BaseModel):
    success: bool = True
    id: str


class HealthResponse(BaseModel):
    status: str = "ok"
    message: str = "Server is running"


class ErrorResponse(BaseModel):
    error: str
    path: Optional[str] = None
