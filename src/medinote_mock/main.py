from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.medinote_mock.api.v1.routes_debug import router as debug_router
from src.medinote_mock.api.v1.routes_patients import router as patients_router_v1
from src.medinote_mock.api.v1.routes_sessions import router as sessions_router_v1
from src.medinote_mock.api.v1.routes_system import API_TITLE, router as system_router
from src.medinote_mock.api.v1.routes_templates import router as templates_router_v1
from src.medinote_mock.api.v1.routes_uploads import public_router as uploads_public_router
from src.medinote_mock.api.v1.routes_uploads import router as uploads_router_v1
from src.medinote_mock.api.v1.routes_users import router as users_router
from src.medinote_mock.config import settings
from src.medinote_mock.errors import MockApiError
from src.medinote_mock.infra.db.inmemory import InMemoryStore
from src.medinote_mock.infra.storage.audio import AudioStorageBackend, LocalAudioStorageBackend

logger = logging.getLogger("medinote_mock")


def _not_found_payload(request: Request) -> dict:
    url = request.url.path
    if request.url.query:
        url = f"{url}?{request.url.query}"
    return {
        "error": "Not found",
        "details": f"Endpoint {request.method} {url} not found",
        "availableEndpoints": "/api/docs",
    }


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(MockApiError)
    async def handle_mock_api_error(request: Request, exc: MockApiError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=exc.to_payload())

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        # Unknown paths and unsupported methods both read as "no such endpoint".
        if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
            return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content=_not_found_payload(request))
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        details = "; ".join(
            f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg', '')}" for err in exc.errors()
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Invalid request body", "details": details},
        )


def create_app(
    *,
    store: Optional[InMemoryStore] = None,
    audio_storage: Optional[AudioStorageBackend] = None,
) -> FastAPI:
    """Build an application instance that owns its own in-memory state.

    Each call gets a freshly seeded store unless one is passed in, so tests
    can run side by side without sharing sessions or chunk records.
    """

    app = FastAPI(title=API_TITLE, version=settings.api_version)
    app.state.store = store or InMemoryStore()
    app.state.audio_storage = audio_storage or LocalAudioStorageBackend()

    @app.on_event("startup")
    async def on_startup() -> None:
        logger.info("%s running on %s:%s", API_TITLE, settings.host, settings.port)
        logger.info("Docs: %s/api/docs", settings.public_base_url)

    @app.on_event("shutdown")
    async def on_shutdown() -> None:
        """Cancel mock completions that have not fired yet."""

        app.state.store.close()

    # CORS configuration: permissive by default so a frontend dev server on
    # any port can call the mock. Narrow via CORS_ALLOW_ORIGINS.
    allow_origins = [origin.strip() for origin in settings.cors_allow_origins.split(",") if origin.strip()] or ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _register_exception_handlers(app)

    app.include_router(system_router)
    app.include_router(users_router)
    app.include_router(patients_router_v1)
    app.include_router(sessions_router_v1)
    app.include_router(templates_router_v1)
    app.include_router(uploads_router_v1)
    app.include_router(uploads_public_router)
    app.include_router(debug_router)

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the mock API with uvicorn."""

    import uvicorn

    logging.basicConfig(level=getattr(logging, settings.log_level.upper(), logging.INFO), format="%(message)s")
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
