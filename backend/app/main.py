# app/main.py
from __future__ import annotations

from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.settings import Settings, settings as default_settings
from app.api.router import api_router
from app.schemas.catalog import ErrorResponse
from app.db.mongo_client import MongoConnectionCache
from app.services.notify_service import ContactNotifier


def create_app(
    settings: Optional[Settings] = None,
    cache: Optional[MongoConnectionCache] = None,
    notifier: Optional[ContactNotifier] = None,
) -> FastAPI:
    settings = settings or default_settings
    app = FastAPI(title=settings.APP_NAME, debug=settings.DEBUG)

    app.state.settings = settings
    app.state.mongo = cache or MongoConnectionCache(settings)
    app.state.notifier = notifier or ContactNotifier(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    app.include_router(api_router, prefix=settings.API_PREFIX)

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(request: Request, exc: StarletteHTTPException):
        # unknown route or wrong method on a known one
        if exc.status_code in (404, 405):
            return JSONResponse(status_code=404, content=ErrorResponse(error="Not found", path=request.url.path).model_dump())
        return JSONResponse(status_code=exc.status_code, content=ErrorResponse(error=str(exc.detail)).model_dump(exclude_none=True))

    @app.exception_handler(RequestValidationError)
    async def _bad_request(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content=ErrorResponse(error="Invalid request body").model_dump(exclude_none=True))

    @app.on_event("startup")
    def _startup():
        if not settings.MONGO_URI:
            print("[WARN] MONGO_URI not set; database requests will fail")
            return

        if settings.ENSURE_INDEXES:
            try:
                from app.db.mongo_indexes import ensure_indexes
                ensure_indexes(app.state.mongo.acquire())
                print("[db] Mongo indexes ensured")
            except Exception as e:
                print("[WARN] Mongo index ensure failed:", e)

    @app.on_event("shutdown")
    def _shutdown():
        app.state.mongo.close()

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=default_settings.HOST, port=default_settings.PORT)
