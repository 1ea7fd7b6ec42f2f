from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from starlette.responses import Response
from starlette.middleware.base import BaseHTTPMiddleware
from sqlalchemy import text
from rental.api import bookings, quotes, vehicles
from rental.core.config import settings
from rental.core.exceptions import RentalError
from rental.core.logging_config import setup_logging
from rental.core.redis import init_redis, close_redis, get_redis
from rental.core.metrics import request_count, request_duration, db_connected, redis_connected, get_metrics_text
from rental.db.session import engine, init_db
import time
import logging

setup_logging()
logger = logging.getLogger(__name__)


class MetricsMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start_time = time.time()
        status = 500

        try:
            response = await call_next(request)
            status = response.status_code
            return response
        finally:
            route = request.scope.get("route")
            endpoint = getattr(route, "path", request.url.path)
            request_count.labels(
                method=request.method,
                endpoint=endpoint,
                status=status
            ).inc()
            request_duration.labels(
                method=request.method,
                endpoint=endpoint
            ).observe(time.time() - start_time)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application starting...")

    logger.info("Initializing Redis connection...")
    try:
        if await init_redis() is not None:
            redis_connected.set(1)
            logger.info("Redis connected")
    except Exception as e:
        logger.error(f"Redis connection failed: {e}")
        redis_connected.set(0)

    try:
        await init_db()
        db_connected.set(1)
        logger.info("Database connected")
    except Exception as e:
        logger.error(f"Database connection failed: {e}")
        db_connected.set(0)

    yield

    logger.info("Application shutting down...")
    await close_redis()
    redis_connected.set(0)
    await engine.dispose()
    logger.info("Shutdown complete")


app = FastAPI(
    title=settings.API_TITLE,
    description=settings.API_DESCRIPTION,
    version=settings.API_VERSION,
    debug=settings.DEBUG,
    lifespan=lifespan
)

app.add_middleware(MetricsMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RentalError)
async def rental_error_handler(request: Request, exc: RentalError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})


app.include_router(vehicles.router)
app.include_router(quotes.router)
app.include_router(bookings.router)


@app.get("/metrics", tags=["monitoring"])
async def metrics():
    return Response(
        content=get_metrics_text(),
        media_type="text/plain; version=0.0.4; charset=utf-8"
    )


async def _database_ready() -> bool:
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.warning(f"Database health check failed: {e}")
        return False


@app.get("/health", tags=["monitoring"])
async def health_check():
    redis_healthy = get_redis() is not None
    database_healthy = await _database_ready()

    return {
        "status": "healthy" if database_healthy else "degraded",
        "service": settings.API_TITLE,
        "version": settings.API_VERSION,
        "dependencies": {
            "redis": "connected" if redis_healthy else "disconnected",
            "database": "connected" if database_healthy else "disconnected"
        }
    }


@app.get("/readiness", tags=["monitoring"])
async def readiness_check():
    if not await _database_ready():
        return JSONResponse(
            status_code=503,
            content={"ready": False, "reason": "Database not available"}
        )

    return {
        "ready": True,
        "service": settings.API_TITLE
    }


@app.get("/", tags=["root"])
async def root():
    return {
        "message": settings.API_TITLE,
        "version": settings.API_VERSION,
        "docs": "/docs",
        "health": "/health",
        "metrics": "/metrics"
    }
