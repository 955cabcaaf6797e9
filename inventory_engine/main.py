# Main application file



import logging
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from inventory_engine.core.exceptions import ConsumptionError
from inventory_engine.core.rate_limiter import limiter
from inventory_engine.routers import (
    inventory,
    notifications,
    pos,
    sales,
)


# LOGGING CONFIGURATION

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)s | %(message)s",
)

logger = logging.getLogger("inventory_engine")


# APP INIT

app = FastAPI(
    title="Inventory Consumption Engine",
    description="Records sales and consumes stock, recipes included, in one transaction",
    version="1.0.0",
)



# CORS (Token-based auth)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://127.0.0.1:3000",
        "http://localhost:3000",
    ],
    allow_credentials=False,
    allow_methods=["GET", "POST", "PATCH", "DELETE"],
    allow_headers=["Authorization", "Content-Type"],
)


# RATE LIMITING

app.state.limiter = limiter
app.add_exception_handler(
    RateLimitExceeded,
    _rate_limit_exceeded_handler
)


# DOMAIN ERRORS

@app.exception_handler(ConsumptionError)
async def consumption_error_handler(request: Request, exc: ConsumptionError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.code, "detail": exc.message},
    )


# REQUEST LOGGING MIDDLEWARE

@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.time()

    response = await call_next(request)

    duration = round((time.time() - start_time) * 1000, 2)

    logger.info(
        f"{request.method} {request.url.path} "
        f"Status: {response.status_code} "
        f"Time: {duration}ms"
    )

    return response


# ROUTERS

app.include_router(pos.router)
app.include_router(sales.router)
app.include_router(inventory.router)
app.include_router(notifications.router)



# ROOT

@app.get("/")
def root():
    logger.info("Health check endpoint called")
    return {"message": "Inventory Consumption Engine is running"}
