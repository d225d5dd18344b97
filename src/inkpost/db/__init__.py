# src/inkpost/db/__init__.py
"""Database configuration and utilities."""

from .session import build_session_factory, get_db

__all__ = ["get_db", "build_session_factory"]
