"""Test package for the Knowledge Base Console.

Structure:
    - unit/: Normalization, text extraction, formatting, settings, client plumbing
    - integration/: Multi-step store workflows and the FastAPI app

The remote service is simulated in-process with httpx.MockTransport, so no
API key or network access is needed. Leverages pytest with pytest-check for
soft assertions.
"""
