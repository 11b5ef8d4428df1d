"""Pydantic schemas for the cost lookup use case. No DB or infrastructure.

Request fields are optional on purpose: presence and blankness are business rules
checked by the validation pipeline so that malformed requests are still audited.
"""

from typing import Optional

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------

class RequestHeaders(BaseModel):
    """Bus headers already parsed by the web layer."""

    transaction_id: str = Field(..., description="Caller-supplied id correlating every audit record")
    channel: Optional[int] = Field(None, description="Originating channel, e.g. 81 or 151")
    user: Optional[str] = Field(None, description="Caller identity")
    operation_name: Optional[str] = None
    total: Optional[int] = None
    session_day: Optional[int] = None
    operation_mode: Optional[int] = None
    profile: Optional[int] = None
    service_version: Optional[str] = None

    model_config = {"frozen": True}


class CostLookupRequest(BaseModel):
    """Body of a transaction cost lookup."""

    document_type: Optional[str] = None
    document_number: Optional[str] = None
    country_code: Optional[str] = None
    concept_code: Optional[str] = None
    session_id: Optional[str] = None
    language_code: Optional[str] = None
    origin: Optional[str] = None
    app_version: Optional[str] = None

    model_config = {"frozen": True}


# ---------------------------------------------------------------------------
# Response schema
# ---------------------------------------------------------------------------

class CostLookupResponse(BaseModel):
    """Cost and currency copied verbatim from the cost profile."""

    movement_timestamp: str = Field(..., description="ISO-8601 with fixed UTC offset, seconds precision")
    cost: int = Field(..., description="Amount in minor units")
    currency: str
