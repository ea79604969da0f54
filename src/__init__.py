"""Knowledge Base Console - manage a hosted vector store and chat against it.

Combines httpx for the remote API, Pydantic for data validation,
NiceGUI for the browser console, and FastAPI to host it.

Components:
    - client: Vector store client (requests, normalization, results)
    - models: Settings, file, message and result schemas
    - storage: Settings persistence over a key-value store
    - utils: Size and date formatting
    - api: FastAPI application and health endpoint
    - ui: Web console for files and chat
"""

__version__ = "0.1.0"
