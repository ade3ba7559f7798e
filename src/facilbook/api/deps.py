"""Shared FastAPI dependencies."""

from fastapi import Request

from facilbook.infra.db import Store


def get_store(request: Request) -> Store:
    """The store owned by the running application."""
    return request.app.state.store
