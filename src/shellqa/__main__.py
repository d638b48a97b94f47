"""Allow ``python -m shellqa``."""

from .cli import app

app()
