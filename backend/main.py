# backend/main.py
import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from contextlib import asynccontextmanager

from config.settings import settings

# database connection
from database.session import engine, init_db

# single gateway that bundles every business router under /api
from gateway.gateway_router import gateway_router

from services.errors import MarketplaceError

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("marketplace")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info(f"{settings.app_name} is starting…")

    try:
        init_db()
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        logger.info("Database connected")
    except Exception as e:
        logger.error(f"Database connection failed: {e}")

    yield
    # Shutdown
    logger.info("Shutting down…")


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.app_name,
        description="B2B automotive marketplace: parts orders, mechanic and logistics bookings, tracking and dashboards",
        version=settings.app_version,
        lifespan=lifespan,
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(MarketplaceError)
    async def marketplace_error_handler(request: Request, exc: MarketplaceError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=exc.to_body())

    # the request session is rolled back when get_db closes it
    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError):
        logger.error(f"{request.method} {request.url.path} database error: {exc}", exc_info=exc)
        return JSONResponse(status_code=500, content={"detail": "Database error"})

    # general health
    @app.get("/health")
    async def health():
        status = {
            "status": "healthy",
            "service": "automotive-marketplace-api",
            "version": settings.app_version,
        }

        # Database
        try:
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            status["database"] = "connected"
        except Exception as e:
            status["database"] = f"error: {e.__class__.__name__}"
            status["status"] = "degraded"

        return status

    @app.get("/")
    async def root():
        return {
            "message": settings.app_name,
            "version": settings.app_version,
            "gateway_base": "/api",
            "docs": "/docs",
            "endpoints": {
                "health": "/health",
                "track": "/api/track?id=",
                "pricing": "/api/pricing/logistics",
            },
        }

    # single entry point: the gateway (users/profiles/products/orders/bookings/tracking/dashboards/admin)
    app.include_router(gateway_router, prefix="/api")

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )
