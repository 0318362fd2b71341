"""Schemas for user-level instance management."""

from pydantic import Field

from .base import SDKWAModel


class CreateInstanceRequest(SDKWAModel):
    tariff: str = Field(..., min_length=1)
    period: str = Field(..., min_length=1)
    payment_type: str | None = None


class ExtendInstanceRequest(SDKWAModel):
    id_instance: int = Field(..., gt=0)
    tariff: str = Field(..., min_length=1)
    period: str = Field(..., min_length=1)
    payment_type: str | None = None
