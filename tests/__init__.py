#!/usr/bin/env python3
"""
Test suite.

    # Run all tests
    uv run python -m pytest tests/ -v

    # Skip timing-sensitive tests
    uv run python -m pytest tests/ -v -m "not slow"

    # Using unittest
    uv run python -m unittest discover tests -v

No external services are needed: Redis is mocked throughout.
"""
