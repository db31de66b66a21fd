# app/api/routes/catalog.py
from __future__ import annotations

import traceback
from typing import Any, Callable, Dict, List

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.api.deps import get_mongo
from app.db.catalog_store import CatalogStore
from app.db.mongo_client import MongoConnectionCache
from app.schemas.catalog import ErrorResponse
from app.services.catalog_service import CatalogService

router = APIRouter(responses={500: {"model": ErrorResponse}})


def _listing(mongo: MongoConnectionCache, what: str, fetch: Callable[[CatalogService], List[Dict[str, Any]]]):
    try:
        svc = CatalogService(CatalogStore(mongo.acquire()))
        # JSONResponse renders here, so encoding errors land in the except below
        return JSONResponse(content=fetch(svc))
    except Exception as e:
        print(f"[ERROR] Error fetching {what}:", e)
        traceback.print_exc()
        return JSONResponse(status_code=500, content=ErrorResponse(error=f"Failed to fetch {what}").model_dump(exclude_none=True))


@router.get("/products")
def list_products(mongo: MongoConnectionCache = Depends(get_mongo)):
    return _listing(mongo, "products", lambda svc: svc.products())


@router.get("/products/featured")
def list_featured_products(mongo: MongoConnectionCache = Depends(get_mongo)):
    return _listing(mongo, "featured products", lambda svc: svc.featured_products())


@router.get("/categories")
def list_categories(mongo: MongoConnectionCache = Depends(get_mongo)):
    return _listing(mongo, "categories", lambda svc: svc.categories())


@router.get("/testimonials")
def list_testimonials(mongo: MongoConnectionCache = Depends(get_mongo)):
    return _listing(mongo, "testimonials", lambda svc: svc.testimonials())
