"""API response models."""
from dataclasses import dataclass
from typing import Any, Dict
from pydantic import BaseModel, Field


class ChatResponse(BaseModel):
    """Body returned by POST /chat."""
    reply: str = Field(..., description="Assistant reply or a fixed status message")
    history: Any = Field(default_factory=list, description="Conversation turns as supplied by the caller, possibly extended")


class LeadResponse(BaseModel):
    """Body returned by POST /lead."""
    success: bool


@dataclass
class RelayResult:
    """HTTP status and JSON body produced by a relay."""
    status_code: int
    body: Dict[str, Any]
