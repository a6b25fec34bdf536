"""Unit tests for the greeter.

Tests use pytest with asyncio support; the Google Cloud client is replaced via monkeypatch.
"""
