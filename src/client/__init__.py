"""Vector store client: the only layer that talks to the remote service.

Responsibilities:
    - Authenticated request construction for files, vector stores and chat
    - Normalization of inconsistent remote payloads into stable models
    - Uniform ApiSuccess / ApiFailure results for every operation

Holds no state between calls. Settings and chat history are passed in
explicitly on every operation.
"""

from src.client.config import ClientConfig, get_client_config
from src.client.errors import PreconditionError
from src.client.text_extraction import extract_response_text, to_text
from src.client.vector_store_client import VectorStoreClient, handle_response

__all__ = [
    "ClientConfig",
    "PreconditionError",
    "VectorStoreClient",
    "extract_response_text",
    "get_client_config",
    "handle_response",
    "to_text",
]
