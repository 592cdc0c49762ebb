"""Unit tests for the FastAPI response adapters."""

import asyncio
import json

from fastapi import Request
from fastapi.responses import JSONResponse

from viewmodel.api import DataResult, ResponseType, read_body, to_response


def make_request(body: bytes) -> Request:
    """Build a bare POST request whose body is ``body``."""

    async def receive() -> dict:
        return {"type": "http.request", "body": body, "more_body": False}

    scope = {"type": "http", "method": "POST", "path": "/data", "headers": [], "query_string": b""}
    return Request(scope, receive)


class TestDataResult:
    def test_json_wraps_in_data_envelope(self) -> None:
        result = DataResult.json([1, 2])
        assert result.type == ResponseType.JSON
        assert result.body == {"data": [1, 2]}

    def test_raw_keeps_body(self) -> None:
        assert DataResult.raw({"data": []}).body == {"data": []}


class TestToResponse:
    def test_json(self) -> None:
        response = to_response(DataResult.raw({"data": [{"a": 1}]}))
        assert isinstance(response, JSONResponse)
        assert json.loads(response.body) == {"data": [{"a": 1}]}

    def test_csv_download(self) -> None:
        response = to_response(DataResult.csv("a;b\n1;2\n"), filename="trips")
        assert response.body == b"a;b\n1;2\n"
        assert response.headers["content-type"].startswith("text/csv")
        assert response.headers["content-disposition"] == 'attachment; filename="trips.csv"'

    def test_excel_download(self) -> None:
        response = to_response(DataResult.excel(b"PK\x03\x04"), filename="trips")
        assert response.body == b"PK\x03\x04"
        assert response.headers["content-type"].startswith("application/vnd.openxmlformats")
        assert response.headers["content-disposition"] == 'attachment; filename="trips.xlsx"'


class TestReadBody:
    def test_json_object(self) -> None:
        assert asyncio.run(read_body(make_request(b'{"_csv": true, "name": "x"}'))) == {
            "_csv": True,
            "name": "x",
        }

    def test_empty_body(self) -> None:
        assert asyncio.run(read_body(make_request(b""))) == {}

    def test_invalid_json(self) -> None:
        assert asyncio.run(read_body(make_request(b"{nope"))) == {}

    def test_non_object(self) -> None:
        assert asyncio.run(read_body(make_request(b"[1, 2]"))) == {}
