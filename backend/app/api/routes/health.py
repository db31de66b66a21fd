# app/api/routes/health.py
from fastapi import APIRouter

from app.schemas.catalog import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
def health():
    return HealthResponse()
