"""
Tests for the identity_service package.

Each suite builds its own application or session from explicit test
Settings backed by a temporary SQLite file, so nothing touches the
deployment database or log directory.
"""
