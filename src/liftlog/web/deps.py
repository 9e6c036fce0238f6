"""Shared request helpers for the routers."""

from pathlib import Path

from fastapi import Request


def get_db(request: Request) -> Path:
    """Database path from app state."""
    return request.app.state.db_path
