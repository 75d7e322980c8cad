"""
Response envelope helpers for TaskVault
Every response is {"success": true, "data": ...} or
{"success": false, "error": {"code": ..., "message": ...}}
"""
from typing import Any

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def ok(data: Any, status_code: int = status.HTTP_200_OK) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": True, "data": jsonable_encoder(data, by_alias=True)},
    )


def fail(status_code: int, message: str, code: str = "ERROR") -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": {"code": code, "message": message}},
    )
