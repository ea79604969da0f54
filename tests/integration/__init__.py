"""Integration tests for components working together as a system.

Coverage:
    - Upload, list, replace and delete sequences against a stateful
      simulated vector store
    - Chat over the retrieval endpoint with threaded history
    - FastAPI app served over ASGI

The simulated store keeps real state across calls, so a file uploaded in
one step is visible to a listing in the next.
"""
