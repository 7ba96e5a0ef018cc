"""
Pydantic models for catalog services.

``ServiceCreate`` mirrors the catalog form: title, details and price
are required and must not be empty, ``available`` defaults to true.
Updates replace all four fields, so ``ServiceUpdate`` shares the same
rules.  ``ServiceRead`` adds the document id.
"""

from typing import Any

from pydantic import BaseModel, Field, field_validator

MISSING_FIELDS_MESSAGE = "Please fill all fields"


class ServiceBase(BaseModel):
    title: str = Field(..., examples=["Full body massage"])
    details: str = Field(..., examples=["60 minutes, includes hot stones"])
    price: float = Field(..., examples=[1500])
    available: bool = Field(True, examples=[True])


class ServiceCreate(ServiceBase):
    """Schema for creating a service."""

    @field_validator("title", "details", "price", mode="before")
    @classmethod
    def require_value(cls, v: Any) -> Any:
        if v is None or v == "":
            raise ValueError(MISSING_FIELDS_MESSAGE)
        return v


class ServiceUpdate(ServiceCreate):
    """Schema for replacing a service's editable fields."""
    pass


class ServiceRead(ServiceBase):
    """Schema for reading a service from the API."""

    id: str

    model_config = {
        "from_attributes": True,
    }
