"""
asgi.py -- ASGI entry point for the authcheck HTTP probe.

Run with:  uvicorn asgi:app
"""

from api.main import app

__all__ = ["app"]
