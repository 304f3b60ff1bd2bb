from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import storefront.db as db
from storefront.main import app
from storefront.models import Base, Product
from storefront.pricing import ShippingPolicy


@pytest.fixture
def db_session():
    """In-memory SQLite session shared with the app via StaticPool."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    original_engine = db.engine
    original_session_local = db.SessionLocal

    # Patch the db module used by the app
    db.engine = engine
    db.SessionLocal = TestingSessionLocal

    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()

    yield session

    session.close()
    db.engine = original_engine
    db.SessionLocal = original_session_local
    engine.dispose()


@pytest.fixture
def client(db_session):
    """FastAPI TestClient backed by the in-memory database."""
    return TestClient(app)


@pytest.fixture
def seeded_products(db_session):
    """A zero-rated book and an 18% exclusive gadget."""
    book = Product(
        name="Zero GST Book",
        category="books",
        price=Decimal("299.00"),
        gst_rate=Decimal("0"),
        gst_type="EXEMPT",
        hsn_code="4901",
        gst_inclusive=False,
        taxable=True,
    )
    gadget = Product(
        name="Bluetooth Speaker",
        category="electronics",
        price=Decimal("999.00"),
        gst_rate=Decimal("18"),
        gst_type="CGST_SGST",
        hsn_code="8517",
        gst_inclusive=False,
        taxable=True,
    )
    db_session.add_all([book, gadget])
    db_session.commit()
    db_session.refresh(book)
    db_session.refresh(gadget)
    return {"book": book, "gadget": gadget}


@pytest.fixture
def shipping():
    """Free shipping from 499, otherwise 99."""
    return ShippingPolicy(free_threshold=Decimal("499"), flat_fee=Decimal("99"))
