"""
Product Routes for the Storefront
=================================

Catalog endpoints needed by checkout: creating a product with its GST
attributes and reading it back.

Endpoints:
----------
- POST /products: Create a product (GST rate validated)
- GET /products/gst-rates: Common GST slabs and a per-category suggestion
- GET /products/{id}: Get a product

GST Rate Rules:
---------------
- 0 to MAX_GST_RATE (28 by default), at most 2 decimal places
- Whole-number rates outside 0/3/5/12/18/28 are accepted with a warning
- When gst_rate is omitted, the category suggestion is used, else the
  configured default rate
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from .. import config
from ..db import get_db
from ..models import Product
from ..pricing import GstType
from ..pricing.gst import common_gst_rates, suggest_gst_rate, validate_gst_rate
from ..pricing.models import MAX_HSN_CODE_LENGTH
from ..schemas.products import (
    GstRateOut,
    GstRatesOut,
    GstSuggestionOut,
    ProductCreate,
    ProductOut,
)


logger = logging.getLogger(__name__)

products_router = APIRouter(prefix="/products", tags=["Products"])


@products_router.post("", response_model=ProductOut, status_code=201)
def create_product(payload: ProductCreate, db: Session = Depends(get_db)) -> ProductOut:
    """Create a catalog product."""
    try:
        gst_type = GstType(payload.gst_type)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Unknown GST type: {payload.gst_type}")

    suggestion = suggest_gst_rate(payload.category)
    gst_rate = payload.gst_rate
    if gst_rate is None:
        gst_rate = suggestion["rate"] if suggestion else config.DEFAULT_GST_RATE

    check = validate_gst_rate(gst_rate, max_rate=config.MAX_GST_RATE)
    if not check.valid:
        raise HTTPException(status_code=400, detail=check.error)

    hsn_code = payload.hsn_code
    if hsn_code is None:
        hsn_code = suggestion["hsn"] if suggestion else ""
    if len(hsn_code) > MAX_HSN_CODE_LENGTH:
        raise HTTPException(status_code=400, detail=f"HSN code cannot exceed {MAX_HSN_CODE_LENGTH} characters")

    product = Product(
        name=payload.name.strip(),
        category=payload.category,
        price=payload.price,
        gst_rate=gst_rate,
        gst_type=gst_type.value,
        hsn_code=hsn_code,
        gst_inclusive=payload.gst_inclusive,
        taxable=payload.taxable,
    )
    db.add(product)
    db.commit()
    db.refresh(product)

    logger.info("Product %s created with GST %s%% (%s)", product.id, gst_rate, gst_type.value)

    out = ProductOut.model_validate(product)
    out.gst_warning = check.warning
    return out


@products_router.get("/gst-rates", response_model=GstRatesOut)
def list_gst_rates(category: Optional[str] = None) -> GstRatesOut:
    """Common GST slabs, plus a suggestion for the given category if there is one."""
    suggestion = suggest_gst_rate(category)
    return GstRatesOut(
        rates=[GstRateOut(**entry) for entry in common_gst_rates()],
        suggestion=GstSuggestionOut(**suggestion) if suggestion else None,
    )


# Registered after /gst-rates so the literal path wins
@products_router.get("/{product_id}", response_model=ProductOut)
def get_product(product_id: int, db: Session = Depends(get_db)) -> ProductOut:
    product = db.get(Product, product_id)
    if product is None:
        raise HTTPException(status_code=404, detail="Product not found")
    return ProductOut.model_validate(product)
