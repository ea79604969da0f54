"""Vector store client for file management and retrieval-backed chat.

Core module talking to the remote files, vector stores and responses
endpoints.

Contract:

1. **Stateless** - Settings arrive with every call and are never stored.
   Conversation history is passed in by the caller and never retained.

2. **Uniform results** - Every operation returns ``ApiSuccess`` or
   ``ApiFailure``. Remote errors, transport errors and missing settings are
   all reported this way. The one exception is ``create_vector_store``,
   whose precondition checks raise ``PreconditionError``.

3. **Best-effort enrichment** - Listing fetches each file's detail record
   concurrently to fill in names and sizes. A failed detail fetch keeps the
   listing's own fields and never fails the listing.

4. **No retries** - A single failed attempt is a terminal failure.
"""

import asyncio
import logging
import time
import uuid
from collections.abc import AsyncIterator, Callable, Sequence
from contextlib import asynccontextmanager
from typing import Any

import httpx

from src.client.config import ClientConfig, get_client_config
from src.client.errors import (
    API_KEY_REQUIRED,
    EMPTY_QUESTION,
    INVALID_API_KEY,
    MALFORMED_RESPONSE,
    MISSING_API_KEY,
    MISSING_VECTOR_STORE_ID,
    STORE_NAME_REQUIRED,
    PreconditionError,
)
from src.client.normalize import (
    enrich_file,
    file_from_attachment,
    file_from_listing,
    raw_file_id,
)
from src.client.text_extraction import extract_response_text
from src.models.schemas import (
    ApiFailure,
    ApiSuccess,
    ChatMessage,
    FilePayload,
    KnowledgeFile,
    Settings,
    VectorStore,
    failure,
    success,
)

logger = logging.getLogger(__name__)

FILE_PURPOSE = "assistants"
LIST_PAGE_SIZE = 100


def _uuid_factory() -> str:
    return str(uuid.uuid4())


def _wall_clock_ms() -> int:
    return int(time.time() * 1000)


def handle_response(response: httpx.Response) -> ApiSuccess[Any] | ApiFailure:
    """Convert an HTTP response into a result.

    A 2xx response yields its decoded JSON body. Anything else yields the
    remote ``error.message`` when the body carries one, else
    ``"<status> <reason>"``.
    """
    if response.is_success:
        try:
            return success(response.json())
        except ValueError:
            logger.warning(f"Unparseable body in {response.status_code} response")
            return failure(MALFORMED_RESPONSE)

    message = f"{response.status_code} {response.reason_phrase}"
    try:
        body = response.json()
    except ValueError:
        body = None
    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, dict) and error.get("message") is not None:
        message = str(error["message"])
    return failure(message)


def _check_settings(settings: Settings) -> ApiFailure | None:
    if not settings.api_key:
        return failure(MISSING_API_KEY)
    if not settings.vector_store_id:
        return failure(MISSING_VECTOR_STORE_ID)
    return None


def _history_entry(message: ChatMessage) -> dict[str, Any]:
    block_type = "output_text" if message.role == "assistant" else "input_text"
    return {
        "role": message.role,
        "content": [{"type": block_type, "text": message.content}],
    }


class VectorStoreClient:
    """Client for the remote vector store and responses API.

    Wraps the raw HTTP endpoints with:
    - Bearer authentication from the per-call settings
    - Normalization of file and chat payloads into stable models
    - Uniform success/failure results
    - Injectable id and clock providers for deterministic output
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        http_client: httpx.AsyncClient | None = None,
        id_factory: Callable[[], str] | None = None,
        clock: Callable[[], int] | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Optional client configuration.
                    Loads from environment if not provided.
            http_client: Shared HTTP client. When omitted, each operation
                         opens and closes its own.
            id_factory: Returns fresh message ids.
            clock: Returns the current time in milliseconds.
        """
        self._config = config or get_client_config()
        self._http_client = http_client
        self._new_id = id_factory or _uuid_factory
        self._clock = clock or _wall_clock_ms

    def _now_seconds(self) -> int:
        return self._clock() // 1000

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._http_client is not None:
            yield self._http_client
            return
        async with httpx.AsyncClient(timeout=self._config.request_timeout) as client:
            yield client

    async def _request(
        self,
        method: str,
        path: str,
        api_key: str,
        headers: dict[str, str] | None = None,
        log_failures: bool = True,
        **kwargs: Any,
    ) -> ApiSuccess[Any] | ApiFailure:
        """Send one authenticated request and wrap the outcome."""
        request_headers = {"Authorization": f"Bearer {api_key}", **(headers or {})}
        url = f"{self._config.base_url}{path}"
        try:
            async with self._session() as client:
                response = await client.request(
                    method, url, headers=request_headers, **kwargs
                )
        except httpx.RequestError as e:
            if log_failures:
                logger.warning(f"{method} {path} failed: {e}")
            return failure(f"Connection error: {e}")
        except UnicodeEncodeError:
            logger.warning(f"{method} {path} not sent: non-ASCII header value")
            return failure(INVALID_API_KEY)

        result = handle_response(response)
        if not result.ok and log_failures:
            logger.warning(f"{method} {path} returned {response.status_code}: {result.error}")
        return result

    # =========================================================================
    # Vector stores
    # =========================================================================

    async def create_vector_store(
        self, name: str, settings: Settings
    ) -> ApiSuccess[VectorStore] | ApiFailure:
        """Create a new vector store.

        Args:
            name: Display name for the store.
            settings: Caller settings; only the API key is used.

        Returns:
            The new store's id and name.

        Raises:
            PreconditionError: If the name is blank or the API key is missing.
        """
        if not name.strip():
            raise PreconditionError(STORE_NAME_REQUIRED)
        if not settings.api_key:
            raise PreconditionError(API_KEY_REQUIRED)

        result = await self._request(
            "POST", "/vector_stores", settings.api_key, json={"name": name}
        )
        if not result.ok:
            return result
        body = result.data if isinstance(result.data, dict) else {}
        if not isinstance(body.get("id"), str):
            return failure(MALFORMED_RESPONSE)

        name = body.get("name")
        store = VectorStore(id=body["id"], name=name if isinstance(name, str) else None)
        logger.info(f"Created vector store {store.id}")
        return success(store)

    # =========================================================================
    # Files
    # =========================================================================

    async def _enrich(self, file: KnowledgeFile, file_id: str, api_key: str) -> KnowledgeFile:
        detail = await self._request("GET", f"/files/{file_id}", api_key, log_failures=False)
        if not detail.ok:
            logger.debug(f"Keeping listed fields for {file.id}: {detail.error}")
            return file
        return enrich_file(file, detail.data)

    async def list_files(self, settings: Settings) -> ApiSuccess[list[KnowledgeFile]] | ApiFailure:
        """List the files attached to the configured vector store.

        Fetches a single page of up to 100 associations, then enriches each
        one from its raw file record concurrently.

        Args:
            settings: Caller settings with API key and vector store id.

        Returns:
            Files in the order the store listed them.
        """
        if problem := _check_settings(settings):
            return problem

        listed = await self._request(
            "GET",
            f"/vector_stores/{settings.vector_store_id}/files",
            settings.api_key,
            params={"limit": LIST_PAGE_SIZE},
        )
        if not listed.ok:
            return listed

        entries = listed.data.get("data") if isinstance(listed.data, dict) else None
        items = [e for e in entries if isinstance(e, dict)] if isinstance(entries, list) else []
        now = self._now_seconds()

        files = await asyncio.gather(
            *(
                self._enrich(file_from_listing(item, now), raw_file_id(item), settings.api_key)
                for item in items
            )
        )
        return success(list(files))

    async def upload_file(
        self, payload: FilePayload, settings: Settings
    ) -> ApiSuccess[KnowledgeFile] | ApiFailure:
        """Upload a file and attach it to the configured vector store.

        Args:
            payload: The local file to upload.
            settings: Caller settings with API key and vector store id.

        Returns:
            The new association, or the error of whichever step failed.
        """
        if problem := _check_settings(settings):
            return problem

        uploaded = await self._request(
            "POST",
            "/files",
            settings.api_key,
            files={"file": (payload.name, payload.content, payload.content_type)},
            data={"purpose": FILE_PURPOSE},
        )
        if not uploaded.ok:
            return uploaded
        uploaded_id = uploaded.data.get("id") if isinstance(uploaded.data, dict) else None
        if not isinstance(uploaded_id, str) or not uploaded_id:
            return failure(MALFORMED_RESPONSE)

        attached = await self._request(
            "POST",
            f"/vector_stores/{settings.vector_store_id}/files",
            settings.api_key,
            json={"file_id": uploaded_id},
        )
        if not attached.ok:
            return attached

        file = file_from_attachment(attached.data, uploaded_id, payload, self._now_seconds())
        logger.info(f"Uploaded {payload.name} ({payload.size} bytes) as {file.id}")
        return success(file)

    async def delete_file(self, file_id: str, settings: Settings) -> ApiSuccess[bool] | ApiFailure:
        """Remove a file association from the configured vector store.

        Args:
            file_id: Vector-store-file association id.
            settings: Caller settings with API key and vector store id.
        """
        if problem := _check_settings(settings):
            return problem

        result = await self._request(
            "DELETE",
            f"/vector_stores/{settings.vector_store_id}/files/{file_id}",
            settings.api_key,
        )
        if not result.ok:
            return result
        logger.info(f"Deleted {file_id} from vector store")
        return success(True)

    async def replace_file(
        self,
        existing_file_id: str,
        payload: FilePayload,
        settings: Settings,
        on_delete_failure: Callable[[str, str], None] | None = None,
    ) -> ApiSuccess[KnowledgeFile] | ApiFailure:
        """Upload a new version of a file, then delete the old association.

        The upload always happens first so the store never holds zero
        versions. The returned result is the upload's; a failed delete only
        reaches the caller through ``on_delete_failure``.

        Args:
            existing_file_id: Association id of the version being replaced.
            payload: The new file.
            settings: Caller settings with API key and vector store id.
            on_delete_failure: Called with (file_id, error) if the old
                               association could not be deleted.
        """
        uploaded = await self.upload_file(payload, settings)
        if not uploaded.ok:
            return uploaded

        deleted = await self.delete_file(existing_file_id, settings)
        if not deleted.ok:
            logger.warning(
                f"Replaced {existing_file_id} but could not delete it: {deleted.error}"
            )
            if on_delete_failure is not None:
                on_delete_failure(existing_file_id, deleted.error)
        return uploaded

    # =========================================================================
    # Chat
    # =========================================================================

    async def ask_question(
        self,
        question: str,
        history: Sequence[ChatMessage],
        settings: Settings,
    ) -> ApiSuccess[ChatMessage] | ApiFailure:
        """Ask a question grounded in the configured vector store.

        Args:
            question: The user's new question.
            history: Prior conversation, oldest first. Not modified.
            settings: Caller settings with API key, model and store id.

        Returns:
            The assistant's reply as a new ChatMessage.
        """
        if not question.strip():
            return failure(EMPTY_QUESTION)
        if problem := _check_settings(settings):
            return problem

        payload = {
            "model": settings.model or self._config.default_model,
            "input": [
                *(_history_entry(m) for m in history),
                {"role": "user", "content": [{"type": "input_text", "text": question}]},
            ],
            "tools": [
                {"type": "file_search", "vector_store_ids": [settings.vector_store_id]}
            ],
        }
        result = await self._request(
            "POST",
            "/responses",
            settings.api_key,
            headers={"OpenAI-Beta": "assistants=v2"},
            json=payload,
        )
        if not result.ok:
            return result

        body = result.data
        response_id = body.get("id") if isinstance(body, dict) else None
        return success(
            ChatMessage(
                id=response_id if isinstance(response_id, str) and response_id else self._new_id(),
                role="assistant",
                content=extract_response_text(body),
                created_at=self._clock(),
            )
        )
