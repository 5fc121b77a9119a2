# tests/unit/__init__.py
"""
Unit tests for the Project Tracker API.

Unit tests exercise repositories and configuration directly, without
going through HTTP.
"""
