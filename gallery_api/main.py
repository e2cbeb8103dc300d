"""
Module-level app so `uvicorn gallery_api.main:app` works.

The application factory lives in gallery_api/app.py; this file builds the
app from environment settings and configures logging once at import time.
"""
from gallery_api.app import configure_logging, create_app
from shared.config import get_settings

configure_logging(get_settings())
app = create_app(get_settings())

__all__ = ["app"]
