"""FastAPI server hosting the knowledge base console.

Endpoints:
    - GET /health: Service health status
    - GET /: NiceGUI console (mounted in integrated mode)
"""

from src.api.app import app, create_app

__all__ = ["app", "create_app"]
