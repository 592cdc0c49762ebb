"""
API module for viewmodel

Glue between rendered components and a FastAPI application.
"""

from .responses import read_body, to_response
from .schemas import DataResult, ResponseType

__all__ = [
    "DataResult",
    "ResponseType",
    "read_body",
    "to_response",
]
