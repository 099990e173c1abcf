import os

# Inside a container the service is reached directly; no reverse proxy
bind = os.getenv("GUNICORN_BIND", "0.0.0.0:8020")

# The snapshot lives in process memory and every worker would download and
# refresh its own copy, so one worker; concurrency comes from the threadpool.
workers = int(os.getenv("GUNICORN_WORKERS", "1"))

# Uvicorn worker for ASGI/FastAPI
worker_class = "uvicorn.workers.UvicornWorker"

# The first dump download happens during worker startup and is retried until
# it succeeds, so the boot timeout must not kill a worker waiting on it.
timeout = int(os.getenv("GUNICORN_TIMEOUT", "0"))
keepalive = int(os.getenv("GUNICORN_KEEPALIVE", "5"))

# Logging to stdout/stderr; the container runtime captures it
loglevel = os.getenv("GUNICORN_LOGLEVEL", "info")
accesslog = "-"
errorlog = "-"

# Graceful behavior
graceful_timeout = int(os.getenv("GUNICORN_GRACEFUL_TIMEOUT", "30"))

# Restarting the only worker would drop the in-memory snapshot
max_requests = 0

# ASGI application; `gunicorn -c deploy/gunicorn.conf.py` needs no app argument
wsgi_app = os.getenv("GUNICORN_APP", "rkn_checker.asgi:app")
