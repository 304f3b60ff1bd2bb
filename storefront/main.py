# Load environment variables FIRST, before any module imports that need them
from dotenv import load_dotenv
load_dotenv()

import logging
from contextlib import asynccontextmanager

from fastapi import APIRouter, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import CORS_ORIGINS
from .db import init_db
from .logging_config import setup_logging
from .pricing import (
    InconsistentTotalError,
    PriceMismatchError,
    PricingError,
)
from .routes import (
    cart_router,
    orders_router,
    payments_router,
    pricing_router,
    products_router,
)

# Configure logging at module load time
setup_logging()

logger = logging.getLogger(__name__)

PRICING_ERROR_MESSAGE = "Pricing error, please retry"


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


app = FastAPI(title="Storefront API", version="1.0.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=CORS_ORIGINS != ["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(PricingError)
async def pricing_error_handler(request: Request, exc: PricingError) -> JSONResponse:
    """
    Abort the request with a generic message.

    Inconsistent totals are a defect in the engine and are logged at ERROR;
    mismatches and bad input are the client's problem.
    """
    if isinstance(exc, InconsistentTotalError):
        logger.error("Pricing invariant violated on %s: %s", request.url.path, exc.message)
        status_code = 500
    elif isinstance(exc, PriceMismatchError):
        logger.warning("Price mismatch on %s: %s", request.url.path, exc.message)
        status_code = 409
    else:
        logger.info("Rejected pricing input on %s: %s", request.url.path, exc.message)
        status_code = 400
    return JSONResponse(
        status_code=status_code,
        content={"detail": PRICING_ERROR_MESSAGE, "code": exc.code},
    )


api_v1_router = APIRouter(prefix="/api/v1")
api_v1_router.include_router(products_router)
api_v1_router.include_router(cart_router)
api_v1_router.include_router(pricing_router)
api_v1_router.include_router(payments_router)
api_v1_router.include_router(orders_router)
app.include_router(api_v1_router)


@app.get("/health", tags=["Health"])
def health() -> dict:
    return {"status": "ok"}
