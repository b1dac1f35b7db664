"""
HTTP Interface

FastAPI host application.
"""

from .rest import create_app

__all__ = ["create_app"]
