"""Entry points for uvicorn/gunicorn (``appregistry.app_factory:app``)."""
from appregistry.app import create_app

app = create_app()

__all__ = ["app", "create_app"]
