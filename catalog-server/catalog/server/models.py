"""Models for the catalog server API."""

from datetime import datetime
from typing import ClassVar, Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field


T = TypeVar("T")


class Item(BaseModel):
    """A read-only catalog entry."""

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid", frozen=True)

    id: str = Field(..., description="Externally assigned unique identifier")
    name: str = Field(..., description="Display name")
    created_at: datetime = Field(..., description="Creation instant (RFC3339)")


class SuccessResponse(BaseModel, Generic[T]):
    """Envelope for a successful reply. Never carries an error."""

    success: Literal[True] = True
    data: T


class ErrorResponse(BaseModel):
    """Envelope for a failed reply. Never carries data."""

    success: Literal[False] = False
    error: str


class HealthStatus(BaseModel):
    status: str = "healthy"
    time: str


class ServerInfo(BaseModel):
    uptime: float
    title: str
    version: str
    item_count: int
