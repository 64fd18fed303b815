"""Unit tests.

Guidelines
- No files or network; capture output in a StringIO.
- Keep tests small, fast and deterministic.
"""
