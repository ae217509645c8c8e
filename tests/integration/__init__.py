# tests/integration/__init__.py
"""
Integration tests for component interactions.

These run the terminal client's ChatApiClient and ChatSession against the
real FastAPI application over ASGITransport. Only the language model is
mocked.
"""
