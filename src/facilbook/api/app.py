"""ASGI entry point: ``uvicorn facilbook.api.app:app``."""

from .factory import create_app

app = create_app()
