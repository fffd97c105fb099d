"""
Pydantic data model for synthesised business listings.
"""

from pydantic import BaseModel, ConfigDict, Field


class BusinessRecord(BaseModel):
    """One row of the result table. Immutable once created."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Identifier, unique within a run")
    name: str = Field(..., description="Business name")
    phone: str = Field(..., description="Locale-formatted phone number")
    email: str = Field(..., description="Contact address")
    website: str = Field(..., description="Business website URL")
    address: str = Field(..., description="Area name + city")
    rating: float = Field(..., ge=3.5, le=5.0, description="Star rating (3.5-5.0)")
    reviews: int = Field(..., ge=50, le=549, description="Number of reviews")


# Column / element order used by every exporter.
FIELD_ORDER: tuple = tuple(BusinessRecord.model_fields)
