from __future__ import annotations

from typing import Literal

from pydantic import BaseModel


class DiagnosticSchema(BaseModel):
    line: int
    message: str
    type: Literal["error", "warning"]


class CompileSuccessResponse(BaseModel):
    success: Literal[True] = True
    pdf: str


class CompileErrorResponse(BaseModel):
    success: Literal[False] = False
    error: str
    errors: list[DiagnosticSchema] = []


class HealthResponse(BaseModel):
    status: str = "ok"
    message: str = "LaTeX proxy server is running"
    timestamp: str
    uptime: float
