from __future__ import annotations

import json
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from latex_proxy.api.dependencies import get_app_settings, get_compiler
from latex_proxy.api.schemas import CompileErrorResponse, CompileSuccessResponse
from latex_proxy.config import Settings
from latex_proxy.core.compile import compile_document
from latex_proxy.core.envelope import error_body, to_envelope
from latex_proxy.core.ports.compiler import RemoteCompiler

router = APIRouter(prefix="/api", tags=["compile"])


class BodyTooLargeError(Exception):
    """More bytes arrived than ``max_request_body_bytes`` allows."""


async def read_limited_body(request: Request, limit: int) -> bytes:
    """Read the request body, counting received bytes so chunked uploads are bounded too."""
    chunks: list[bytes] = []
    received = 0
    async for chunk in request.stream():
        received += len(chunk)
        if received > limit:
            raise BodyTooLargeError(f"Request body exceeds {limit} bytes")
        chunks.append(chunk)
    return b"".join(chunks)


@router.post(
    "/compile",
    response_model=CompileSuccessResponse,
    responses={
        400: {"model": CompileErrorResponse, "description": "Invalid input or size limit exceeded"},
        413: {"model": CompileErrorResponse, "description": "Request body too large"},
        500: {"model": CompileErrorResponse, "description": "Compilation failed"},
    },
)
async def compile_latex(
    request: Request,
    compiler: RemoteCompiler = Depends(get_compiler),
    settings: Settings = Depends(get_app_settings),
) -> JSONResponse:
    """Compile ``latexCode`` plus ``projectFiles`` and return the PDF as base64."""
    try:
        body = await read_limited_body(request, settings.max_request_body_bytes)
    except BodyTooLargeError:
        return JSONResponse(error_body("Request body too large"), status_code=413)

    try:
        payload: Any = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        return JSONResponse(error_body("Valid LaTeX code is required"), status_code=400)

    outcome = await compile_document(compiler, payload, settings)
    status_code, response_body = to_envelope(outcome, settings)
    return JSONResponse(response_body, status_code=status_code)
