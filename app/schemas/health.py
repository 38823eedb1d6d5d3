"""
app/schemas/health.py
"""

from __future__ import annotations

from pydantic import BaseModel


class DatabaseHealthResponse(BaseModel):
    connected: bool
    error: str | None = None


class HealthResponse(BaseModel):
    status: str
    service: str
    database: DatabaseHealthResponse
