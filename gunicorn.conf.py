"""Gunicorn configuration for the FastAPI/ASGI runtime."""

import os

# Ensure ASGI worker is used even when start command is `gunicorn app.main:app`.
worker_class = "uvicorn.workers.UvicornWorker"

bind = f"0.0.0.0:{os.getenv('PORT', '8000')}"

# bcrypt verification is CPU bound; scale workers rather than threads.
workers = int(os.getenv("WEB_CONCURRENCY", "2"))
timeout = int(os.getenv("GUNICORN_TIMEOUT", "60"))
keepalive = int(os.getenv("GUNICORN_KEEPALIVE", "5"))
graceful_timeout = int(os.getenv("GUNICORN_GRACEFUL_TIMEOUT", "30"))

# Application logs are JSON on stdout; keep gunicorn's own logs there too.
accesslog = "-"
errorlog = "-"
loglevel = os.getenv("GUNICORN_LOG_LEVEL", "info")
