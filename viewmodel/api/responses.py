"""FastAPI adapters: turn DataResults into HTTP responses and read request bodies."""

import json
import logging
from typing import Any

from fastapi import Request, Response
from fastapi.responses import JSONResponse

from .schemas import DataResult, ResponseType

logger = logging.getLogger(__name__)

CSV_MEDIA_TYPE = "text/csv; charset=utf-8"
XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _attachment(filename: str) -> dict[str, str]:
    return {"Content-Disposition": f'attachment; filename="{filename}"'}


def to_response(result: DataResult, filename: str = "export") -> Response:
    """JSON bodies become a JSONResponse; CSV/Excel become file downloads."""
    if result.type == ResponseType.CSV:
        return Response(
            content=result.body,
            media_type=CSV_MEDIA_TYPE,
            headers=_attachment(f"{filename}.csv"),
        )
    if result.type == ResponseType.EXCEL:
        return Response(
            content=result.body,
            media_type=XLSX_MEDIA_TYPE,
            headers=_attachment(f"{filename}.xlsx"),
        )
    return JSONResponse(content=result.body)


async def read_body(request: Request) -> dict[str, Any]:
    """JSON request body as a dict. Empty or malformed bodies give {}."""
    raw = await request.body()
    if not raw:
        return {}
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.debug(f"read_body: ignoring unparsable body: {e}")
        return {}
    if not isinstance(data, dict):
        logger.debug(f"read_body: expected a JSON object, got {type(data).__name__}")
        return {}
    return data
