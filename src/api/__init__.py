"""
FastAPI extraction service.

Provides REST API for calendar event extraction with:
- POST /extract - Upload a document and extract its events
- GET /health - Service health check
"""

from src.api.app import create_app

__all__ = ["create_app"]
