"""Pydantic models shared by the client, storage and UI layers.

Provides type safety and validation for everything that crosses the
client boundary.

Models:
    - Settings: API key, model and vector store id supplied per call
    - KnowledgeFile: A document attached to the vector store
    - ChatMessage: Individual message in the conversation
    - VectorStore: Result of creating a new store
    - FilePayload: Local file selected for upload
    - ApiSuccess / ApiFailure: Tagged result of every client operation
"""

from src.models.schemas import (
    DEFAULT_SETTINGS_MODEL,
    ApiFailure,
    ApiResult,
    ApiSuccess,
    ChatMessage,
    FilePayload,
    KnowledgeFile,
    Settings,
    VectorStore,
    failure,
    success,
)

__all__ = [
    "DEFAULT_SETTINGS_MODEL",
    "ApiFailure",
    "ApiResult",
    "ApiSuccess",
    "ChatMessage",
    "FilePayload",
    "KnowledgeFile",
    "Settings",
    "VectorStore",
    "failure",
    "success",
]
