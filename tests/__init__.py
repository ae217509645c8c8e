# tests/__init__.py
"""
Test suite for Decision Assistant.

This package contains all tests for the application:
- unit: Unit tests for individual components
- integration: The terminal client's HTTP layer against the assembled app
- config: Settings and secret masking
"""
