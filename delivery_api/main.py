"""Main FastAPI application for the delivery records API."""

import sys
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, Query, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from loguru import logger
from sqlalchemy.exc import SQLAlchemyError

from .config import settings
from .errors import DatabaseError, DeliveryAPIError, DeliveryNotFound, ValidationFailed
from .models import (
    DELIVERY_FILTER_RULES,
    STATUS_UPDATE_RULES,
    DeliveryFilters,
    StatusUpdate,
    run_rules,
)
from .storage import DeliveryRepository, check_connection, create_engine


# Configure logging
logger.remove()
logger.add(
    sys.stderr,
    format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>",
    level=settings.log_level
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan - connection pool startup and shutdown."""
    logger.info("Starting Delivery API")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Log Level: {settings.log_level}")

    app.state.engine = create_engine(settings)

    base_url = f"http://localhost:{settings.port}"
    logger.info(
        f"List deliveries: GET {base_url}/api/deliveries"
        "?startDate=YYYY-MM-DD&endDate=YYYY-MM-DD&pdv=123&status=S"
    )
    logger.info(
        f"Update status: PUT {base_url}/api/deliveries/:id/status "
        'with body {"status": "S", "delivererName": "Deliverer Name"}'
    )

    yield

    # Shutdown
    logger.info("Disposing connection pool...")
    await app.state.engine.dispose()
    logger.info("Shut down complete")


# Create FastAPI app
app = FastAPI(
    title="Delivery API",
    description="Read and update delivery records",
    version="1.0.0",
    lifespan=lifespan
)


@app.exception_handler(DeliveryAPIError)
async def delivery_api_error_handler(request: Request, exc: DeliveryAPIError):
    return JSONResponse({"message": exc.message}, status_code=exc.status_code)


@app.middleware("http")
async def require_database(request: Request, call_next):
    """Verify a pooled connection can be acquired before routing."""
    try:
        await check_connection(request.app.state.engine)
    except (SQLAlchemyError, OSError):
        logger.exception("Failed to connect to the database")
        return JSONResponse(
            {"message": "Internal server error: database connection failed."},
            status_code=500
        )
    return await call_next(request)


def get_repository(request: Request) -> DeliveryRepository:
    return DeliveryRepository(request.app.state.engine)


@app.get("/health")
async def health_check():
    """Health check endpoint; only reached when the database is reachable."""
    return {
        "status": "healthy",
        "environment": settings.environment
    }


@app.get("/api/deliveries")
async def list_deliveries(
    start_date: Optional[str] = Query(None, alias="startDate", description="YYYY-MM-DD"),
    end_date: Optional[str] = Query(None, alias="endDate", description="YYYY-MM-DD"),
    pdv: Optional[str] = Query(None, description="Point of sale (CAIXA or COO)"),
    status: Optional[str] = Query(None, description="'S' delivered, 'N' not delivered"),
    repository: DeliveryRepository = Depends(get_repository),
):
    """List deliveries matching the optional filters."""
    params = {"startDate": start_date, "endDate": end_date, "pdv": pdv, "status": status}

    outcome = run_rules(DELIVERY_FILTER_RULES, params)
    if not outcome.passed:
        logger.warning(f"Rejected delivery filters {params}: {outcome.reason}")
        raise ValidationFailed(outcome.reason)

    try:
        rows = await repository.find(DeliveryFilters.from_query(params))
        # Encode here so undecodable column bytes surface as a JSON 500
        return jsonable_encoder(rows)
    except (SQLAlchemyError, ValueError):
        logger.exception("Error fetching deliveries")
        raise DatabaseError("Internal server error while fetching deliveries.")


@app.put("/api/deliveries/{delivery_id}/status")
async def update_delivery_status(
    delivery_id: str,
    request: Request,
    repository: DeliveryRepository = Depends(get_repository),
):
    """
    Set the delivered flag and deliverer name of one delivery.

    Body: {"status": "S" | "N", "delivererName": "<name>"}
    """
    try:
        payload = await request.json()
    except ValueError:
        payload = {}
    if not isinstance(payload, dict):
        payload = {}

    outcome = run_rules(STATUS_UPDATE_RULES, payload)
    if not outcome.passed:
        logger.warning(f"Rejected status update for delivery {delivery_id}: {outcome.reason}")
        raise ValidationFailed(outcome.reason)

    update = StatusUpdate.from_payload(payload)
    try:
        matched = await repository.update_status(delivery_id, update)
    except SQLAlchemyError:
        logger.exception("Error updating delivery status")
        raise DatabaseError("Internal server error while updating delivery status.")

    if matched == 0:
        raise DeliveryNotFound(delivery_id)

    return {
        "message": (
            f'Delivery {delivery_id} status updated to "{update.status.value}" '
            f'and deliverer set to "{update.deliverer_name}".'
        )
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "delivery_api.main:app",
        host="0.0.0.0",
        port=settings.port,
        log_level=settings.log_level.lower(),
        reload=not settings.is_production
    )
