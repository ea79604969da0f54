"""Pytest fixtures and shared test configuration.

Fixtures:
    - fake_api: Stateful in-memory stand-in for the remote vector store API
    - settings / empty_settings: Ready and unconfigured caller settings
    - vs_client: VectorStoreClient wired to fake_api with a fixed clock
    - async_client: HTTPX client for the FastAPI app
"""

import itertools
import json
import re
from collections.abc import AsyncGenerator
from typing import Any

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from src.api import app
from src.client import ClientConfig, VectorStoreClient
from src.models import Settings

TEST_API_KEY = "sk-test-key"
TEST_STORE_ID = "vs_test"
BASE_URL = "https://api.test/v1"
FIXED_NOW_MS = 1_700_000_000_000
REMOTE_CREATED_AT = 1_690_000_000


class FakeVectorStoreApi:
    """In-memory simulation of the files, vector store and responses endpoints.

    Keeps uploaded raw files and store associations across calls. Individual
    routes can be forced to fail with ``fail``.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.raw_files: dict[str, dict[str, Any]] = {}
        self.associations: dict[str, dict[str, Any]] = {}
        self.chat_response: dict[str, Any] = {
            "id": "resp_1",
            "output": [
                {"type": "message", "content": [{"type": "output_text", "text": "Paris"}]}
            ],
        }
        self._failures: list[tuple[str, str, int, dict[str, Any]]] = []
        self._ids = itertools.count(1)

    # --- Test controls ---

    def fail(
        self,
        method: str,
        path_pattern: str,
        status_code: int = 500,
        body: Any = None,
        content: bytes | None = None,
    ) -> None:
        """Make requests matching method and path regex return an error."""
        kwargs = {"content": content} if content is not None else {"json": body or {}}
        self._failures.append((method, path_pattern, status_code, kwargs))

    def add_stored_file(
        self,
        filename: str,
        size: int,
        with_detail: bool = True,
        **association: Any,
    ) -> str:
        """Seed a raw file attached to the store; returns the association id."""
        file_id = f"file-{next(self._ids)}"
        if with_detail:
            self.raw_files[file_id] = {
                "id": file_id,
                "filename": filename,
                "bytes": size,
                "created_at": REMOTE_CREATED_AT,
                "metadata": {},
            }
        association_id = f"vsf-{next(self._ids)}"
        self.associations[association_id] = {
            "id": association_id,
            "file_id": file_id,
            "status": "completed",
            "usage_bytes": size,
            "created_at": REMOTE_CREATED_AT,
            **association,
        }
        return association_id

    def paths(self, method: str | None = None) -> list[str]:
        return [
            r.url.path for r in self.requests if method is None or r.method == method
        ]

    def last_json(self, method: str, path: str) -> Any:
        for request in reversed(self.requests):
            if request.method == method and request.url.path.endswith(path):
                return json.loads(request.content)
        raise AssertionError(f"No {method} request to {path}")

    # --- Transport ---

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix("/v1")

        if request.headers.get("Authorization") != f"Bearer {TEST_API_KEY}":
            return httpx.Response(
                401, json={"error": {"message": "Incorrect API key provided"}}
            )
        for method, pattern, status_code, kwargs in self._failures:
            if request.method == method and re.fullmatch(pattern, path):
                return httpx.Response(status_code, **kwargs)

        if request.method == "POST" and path == "/vector_stores":
            name = json.loads(request.content)["name"]
            return httpx.Response(200, json={"id": "vs_created", "name": name})

        if re.fullmatch(r"/vector_stores/[^/]+/files", path):
            if request.method == "GET":
                return httpx.Response(
                    200, json={"object": "list", "data": list(self.associations.values())}
                )
            return self._attach(json.loads(request.content)["file_id"])

        if match := re.fullmatch(r"/vector_stores/([^/]+)/files/([^/]+)", path):
            association_id = match.group(2)
            if self.associations.pop(association_id, None) is None:
                return _not_found(association_id)
            return httpx.Response(200, json={"id": association_id, "deleted": True})

        if request.method == "POST" and path == "/files":
            return self._create_file(request)

        if match := re.fullmatch(r"/files/([^/]+)", path):
            detail = self.raw_files.get(match.group(1))
            return httpx.Response(200, json=detail) if detail else _not_found(match.group(1))

        if request.method == "POST" and path == "/responses":
            return httpx.Response(200, json=self.chat_response)

        return _not_found(path)

    def _create_file(self, request: httpx.Request) -> httpx.Response:
        body = request.content
        boundary = request.headers["Content-Type"].split("boundary=")[1].encode()
        fields: dict[str, tuple[str | None, bytes]] = {}
        for part in body.split(b"--" + boundary):
            headers, _, data = part.partition(b"\r\n\r\n")
            name = re.search(rb'name="([^"]+)"', headers)
            if not name:
                continue
            filename = re.search(rb'filename="([^"]*)"', headers)
            fields[name.group(1).decode()] = (
                filename.group(1).decode() if filename else None,
                data.removesuffix(b"\r\n"),
            )

        filename, content = fields["file"]
        file_id = f"file-{next(self._ids)}"
        self.raw_files[file_id] = {
            "id": file_id,
            "filename": filename,
            "bytes": len(content),
            "purpose": fields["purpose"][1].decode(),
            "created_at": REMOTE_CREATED_AT,
        }
        return httpx.Response(200, json=self.raw_files[file_id])

    def _attach(self, file_id: str) -> httpx.Response:
        if file_id not in self.raw_files:
            return _not_found(file_id)
        association_id = f"vsf-{next(self._ids)}"
        self.associations[association_id] = {
            "id": association_id,
            "file_id": file_id,
            "status": "in_progress",
            "usage_bytes": 0,
            "created_at": REMOTE_CREATED_AT,
        }
        return httpx.Response(200, json=self.associations[association_id])


def _not_found(what: str) -> httpx.Response:
    return httpx.Response(404, json={"error": {"message": f"No such resource: {what}"}})


@pytest.fixture
def fake_api() -> FakeVectorStoreApi:
    """Fresh simulated remote for each test."""
    return FakeVectorStoreApi()


@pytest.fixture
def settings() -> Settings:
    """Settings with API key, model and vector store id."""
    return Settings(api_key=TEST_API_KEY, model="gpt-4o", vector_store_id=TEST_STORE_ID)


@pytest.fixture
def empty_settings() -> Settings:
    """Settings as loaded on first visit."""
    return Settings()


@pytest.fixture
async def vs_client(fake_api: FakeVectorStoreApi) -> AsyncGenerator[VectorStoreClient]:
    """VectorStoreClient talking to the simulated remote.

    Message ids come from a counter and the clock is frozen at
    FIXED_NOW_MS.
    """
    ids = (f"msg-{n}" for n in itertools.count(1))
    transport = httpx.MockTransport(fake_api.handle)
    async with httpx.AsyncClient(transport=transport) as http_client:
        yield VectorStoreClient(
            config=ClientConfig(base_url=BASE_URL, default_model="gpt-4o-mini"),
            http_client=http_client,
            id_factory=lambda: next(ids),
            clock=lambda: FIXED_NOW_MS,
        )


@pytest.fixture
async def async_client() -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        Configured AsyncClient for making test requests.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
