"""Plain data models exchanged with the HTTP client collaborator."""

from typing import Dict, Optional

from pydantic import BaseModel, Field


class HttpRequest(BaseModel):
    """A fully built request, free of any HTTP framework types."""

    method: str
    path: str
    headers: Dict[str, str] = Field(default_factory=dict)
    query_params: Dict[str, str] = Field(default_factory=dict)
    body: Optional[str] = None


class HttpResponse(BaseModel):
    """What came back from the target service."""

    status_code: int
    headers: Dict[str, str] = Field(default_factory=dict)
    body: str = ""
    elapsed: float = 0.0
