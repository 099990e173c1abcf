# rkn_checker/asgi.py
"""
ASGI entry point for servers that import an app object:

    uvicorn rkn_checker.asgi:app --port 8020
    gunicorn -c deploy/gunicorn.conf.py

The rkn-checker command builds its own app from flags and does not import this.
"""
from rkn_checker.main import create_app
from rkn_checker.utils.logger import setup_logging

setup_logging()
app = create_app()
