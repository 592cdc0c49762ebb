"""
API schemas for viewmodel

Typed response bodies handed from components to the HTTP layer.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ResponseType(str, Enum):
    JSON = "json"
    CSV = "csv"
    EXCEL = "excel"


@dataclass
class DataResult:
    """A response body plus how to send it."""

    type: ResponseType
    body: Any

    @classmethod
    def json(cls, data: Any) -> "DataResult":
        """Wrap data in the standard {"data": ...} envelope."""
        return cls(ResponseType.JSON, {"data": data})

    @classmethod
    def raw(cls, body: dict[str, Any]) -> "DataResult":
        """JSON body sent as-is (table data responses carry their own shape)."""
        return cls(ResponseType.JSON, body)

    @classmethod
    def csv(cls, text: str) -> "DataResult":
        return cls(ResponseType.CSV, text)

    @classmethod
    def excel(cls, content: bytes) -> "DataResult":
        return cls(ResponseType.EXCEL, content)
