"""Pydantic models for the HTTP channel host."""

from typing import Any, List, Optional

from pydantic import BaseModel


class MethodCallRequest(BaseModel):
    """A method call sent to a channel over HTTP."""
    method: str
    args: Optional[Any] = None


class ErrorBody(BaseModel):
    """Error reply fields."""
    code: str
    message: Optional[str] = None
    details: Optional[Any] = None


class MethodReply(BaseModel):
    """Reply to a method call: success, error or not_implemented."""
    status: str
    result: Optional[Any] = None
    error: Optional[ErrorBody] = None


class HealthResponse(BaseModel):
    status: str
    engine: str
    platform: str
    channels: List[str]
