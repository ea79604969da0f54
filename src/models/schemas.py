from typing import Generic, Literal, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")

DEFAULT_SETTINGS_MODEL = "gpt-5-nano"


class Settings(BaseModel):
    """Credentials and target store for every client operation.

    Persisted with camelCase keys (``apiKey``, ``vectorStoreId``); either the
    alias or the field name is accepted on construction.

    Attributes:
        api_key: Bearer credential for the remote service.
        model: Model identifier used for chat requests.
        vector_store_id: Vector store that files are attached to and searched.
    """

    model_config = ConfigDict(populate_by_name=True)

    api_key: str = Field(default="", alias="apiKey")
    model: str = Field(default=DEFAULT_SETTINGS_MODEL)
    vector_store_id: str = Field(default="", alias="vectorStoreId")

    @property
    def is_ready(self) -> bool:
        """Whether both the API key and vector store id are set."""
        return bool(self.api_key and self.vector_store_id)


class KnowledgeFile(BaseModel):
    """One document attached to the vector store.

    Attributes:
        id: Vector-store-file association id (not the raw file id).
        filename: Display name of the document.
        bytes: Size in bytes.
        status: Ingestion status, e.g. "completed" or "in_progress".
        created_at: Unix timestamp in seconds.
        metadata: String attributes attached to the file.
    """

    id: str
    filename: str
    bytes: int = Field(default=0, ge=0)
    status: str = "unknown"
    created_at: int
    metadata: dict[str, str] = Field(default_factory=dict)


class ChatMessage(BaseModel):
    """A single message in the conversation.

    Attributes:
        id: Message identifier.
        role: The speaker (user, assistant, or system).
        content: The message text.
        created_at: Timestamp in milliseconds.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str
    role: Literal["user", "assistant", "system"]
    content: str
    created_at: int = Field(alias="createdAt")


class VectorStore(BaseModel):
    """A newly created vector store."""

    id: str
    name: str | None = None


class FilePayload(BaseModel):
    """A local file selected for upload.

    Attributes:
        name: Original filename.
        content: Raw file bytes.
        content_type: MIME type sent with the multipart upload.
    """

    name: str
    content: bytes
    content_type: str = "application/octet-stream"

    @property
    def size(self) -> int:
        return len(self.content)


class ApiSuccess(BaseModel, Generic[T]):
    """Successful operation result."""

    ok: Literal[True] = True
    data: T


class ApiFailure(BaseModel):
    """Failed operation result with a human-readable message."""

    ok: Literal[False] = False
    error: str


ApiResult = Union[ApiSuccess[T], ApiFailure]


def success(data: T) -> ApiSuccess[T]:
    return ApiSuccess(data=data)


def failure(message: str) -> ApiFailure:
    return ApiFailure(error=message)
