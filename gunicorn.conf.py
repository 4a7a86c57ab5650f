"""Gunicorn configuration for FastAPI/ASGI runtime."""

import os

# Ensure ASGI worker is used even when start command is `gunicorn app.main:app`.
worker_class = "uvicorn.workers.UvicornWorker"

bind = f"0.0.0.0:{os.getenv('PORT', '8000')}"

workers = int(os.getenv("WEB_CONCURRENCY", "2"))
timeout = int(os.getenv("GUNICORN_TIMEOUT", "60"))
graceful_timeout = int(os.getenv("GUNICORN_GRACEFUL_TIMEOUT", "30"))
accesslog = "-" if os.getenv("GUNICORN_ACCESS_LOG", "").lower() in ("1", "true") else None
