"""Errors and fixed messages for the vector store client."""

MISSING_API_KEY = "Missing API key"
MISSING_VECTOR_STORE_ID = "Missing vector store id"
EMPTY_QUESTION = "Question is empty"
STORE_NAME_REQUIRED = "Vector store name is required"
API_KEY_REQUIRED = "API key required"
MALFORMED_RESPONSE = "Malformed response from server"
INVALID_API_KEY = "API key contains characters that cannot be sent in a header"


class PreconditionError(ValueError):
    """Raised by create_vector_store when a required input is missing.

    Every other operation reports the same kind of problem as an
    ``ApiFailure`` instead of raising.
    """

    pass
