"""FastAPI HTTP layer package.

Public re-export so callers can write::

    from pagesum.api import app

    uvicorn pagesum.api:app --port 4000
"""

from pagesum.api.app import app

__all__ = ["app"]
