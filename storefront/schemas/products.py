"""Catalog product schemas."""

from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ProductCreate(BaseModel):
    """
    Request body for creating a catalog product.

    gst_rate may be left out: the category suggestion is used when there is
    one, otherwise the configured default rate.
    """
    name: str = Field(min_length=1)
    category: Optional[str] = None
    price: Decimal = Field(ge=0)
    gst_rate: Optional[Decimal] = None
    gst_type: str = "CGST_SGST"
    hsn_code: Optional[str] = None
    gst_inclusive: bool = False
    taxable: bool = True


class ProductOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    category: Optional[str] = None
    price: Decimal
    gst_rate: Decimal
    gst_type: str
    hsn_code: str
    gst_inclusive: bool
    taxable: bool
    gst_warning: Optional[str] = None


class GstRateOut(BaseModel):
    rate: Decimal
    label: str
    description: str


class GstSuggestionOut(BaseModel):
    rate: Decimal
    note: str
    hsn: str


class GstRatesOut(BaseModel):
    """Standard GST slabs for the product form, with an optional category suggestion."""
    rates: List[GstRateOut]
    suggestion: Optional[GstSuggestionOut] = None
