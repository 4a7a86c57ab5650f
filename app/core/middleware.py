"""HTTP middleware."""
import time
import uuid

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import settings
from app.core.logging import get_logger, request_id_var


logger = get_logger(__name__)


def setup_middleware(app: FastAPI):
    """Configure all middleware for the application."""

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    @app.middleware("http")
    async def log_requests(request, call_next):
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        token = request_id_var.set(request_id)
        start_time = time.time()
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        process_time = time.time() - start_time
        response.headers["X-Request-ID"] = request_id
        logger.info(
            f"{request.method} {request.url.path} - "
            f"Status: {response.status_code} - "
            f"Time: {process_time:.4f}s",
            extra={"request_id": request_id},
        )
        return response
