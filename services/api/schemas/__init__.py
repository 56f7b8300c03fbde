"""Pydantic schemas for API request/response models."""
from datetime import datetime

from pydantic import BaseModel, Field

__all__ = [
    "CompareRequest",
    "ServiceInfoResponse",
    "HealthResponse",
    "ErrorResponse",
]


class CompareRequest(BaseModel):
    """Owners to diff; the migration analysis covers ``schema1``."""
    schema1: str = Field(..., min_length=1)
    schema2: str = Field(..., min_length=1)


class ServiceInfoResponse(BaseModel):
    service: str
    version: str
    status: str


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime


class ErrorResponse(BaseModel):
    detail: str
