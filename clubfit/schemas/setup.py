"""
Schemas for the administrative catalog setup endpoint.
"""

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class SetupResponse(BaseModel):
    """Response model for POST /api/setup."""
    message: str = Field(..., examples=["Database setup completed successfully"])
    clubs_inserted: int = Field(..., ge=0, examples=[6])

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
    }
