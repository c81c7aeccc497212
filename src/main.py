"""ASGI entrypoint: `uvicorn src.main:app`. Configuration comes from the environment (see src/core/config.py)."""

from src.api.app import create_app

app = create_app()
