# tests/unit/__init__.py
"""
Unit tests for individual components.

Unit tests focus on testing individual functions, classes, and modules
in isolation. The language model is always mocked.

Guidelines:
- Mock external dependencies
- Test one thing at a time
- Use descriptive test names
- Keep tests fast (< 1 second each)
"""
