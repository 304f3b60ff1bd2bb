from decimal import Decimal

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    func,
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()

# Money columns: 12 digits, 2 after the point. Rates: up to 999.99.
Money = Numeric(12, 2, asdecimal=True)
Rate = Numeric(5, 2, asdecimal=True)


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    category = Column(String, nullable=True, index=True)
    price = Column(Money, nullable=False)

    # GST attributes, copied into cart lines when a product is added to a cart
    gst_rate = Column(Rate, nullable=False, default=Decimal("18"))
    gst_type = Column(String, nullable=False, default="CGST_SGST")  # CGST_SGST / IGST / EXEMPT / ZERO_RATED
    hsn_code = Column(String(10), nullable=False, default="")
    gst_inclusive = Column(Boolean, nullable=False, default=False)
    taxable = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    order_number = Column(String, unique=True, nullable=False, index=True)
    status = Column(String, nullable=False, default="pending", index=True)  # pending/processing/shipped/delivered/cancelled/refunded

    customer_name = Column(String, nullable=True)
    customer_email = Column(String, nullable=True)
    is_guest_order = Column(Boolean, nullable=False, default=False)

    payment_method = Column(String, nullable=False)
    payment_status = Column(String, nullable=False, default="unpaid")
    gateway_order_id = Column(String, nullable=True, index=True)

    # Full price breakdown, as computed by the pricing engine at placement time
    items_price = Column(Money, nullable=False)
    tax_price = Column(Money, nullable=False, default=Decimal("0"))
    shipping_price = Column(Money, nullable=False, default=Decimal("0"))
    total_price = Column(Money, nullable=False)
    currency = Column(String(3), nullable=False, default="INR")

    # Shipping policy in force when the order was priced, for re-verification
    free_shipping_threshold = Column(Money, nullable=False)
    flat_shipping_fee = Column(Money, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)

    items = relationship(
        "OrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItem.position",
    )

    __table_args__ = (
        Index("ix_orders_status_created_at", "status", "created_at"),
    )


class OrderItem(Base):
    """Frozen copy of a cart line (OrderLineSnapshot) stored with its order."""
    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)

    line_ref = Column(String, nullable=False)
    product_name = Column(String, nullable=True)
    unit_price = Column(Money, nullable=False)
    quantity = Column(Integer, nullable=False)

    # Tax configuration snapshot
    gst_rate = Column(Rate, nullable=False)
    gst_type = Column(String, nullable=False)
    hsn_code = Column(String(10), nullable=False, default="")
    gst_inclusive = Column(Boolean, nullable=False)
    taxable = Column(Boolean, nullable=False)

    # Per-line result
    taxable_base = Column(Money, nullable=False)
    tax_amount = Column(Money, nullable=False)

    order = relationship("Order", back_populates="items")
